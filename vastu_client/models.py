from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class Credential:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class AuthState:
    is_signed_in: bool
    username: str | None = None
    tenant_id: str | None = None
    error: str | None = None


class OnboardingStage(str, Enum):
    USER_DETAILS = "userDetails"
    PROPERTY_ADDRESS = "propertyAddress"
    MAIN_CONTENT = "mainContent"


class SessionEventType(str, Enum):
    SIGNED_IN = "signed_in"
    STAGE_CHANGED = "stage_changed"
    PROFILE_CHANGED = "profile_changed"
    SIGNED_OUT = "signed_out"
    RESET = "reset"
    ACCOUNT_DELETED = "account_deleted"


@dataclass(frozen=True)
class SessionEvent:
    type: SessionEventType
    is_authenticated: bool
    stage: OnboardingStage
    details: dict[str, Any] = field(default_factory=dict)


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Local records


class PropertyType(str, Enum):
    HOME = "Home"
    WORK = "Work"
    OFFICE = "Office"
    OTHER = "Other"


_API_PROPERTY_TYPES = {
    PropertyType.HOME: "residential",
    PropertyType.WORK: "work",
    PropertyType.OFFICE: "office",
    PropertyType.OTHER: "other",
}


class PropertyAddress(WireModel):
    id: Optional[str] = None
    location: str
    complete_address: str = Field(alias="completeAddress")
    pincode: str
    property_type: PropertyType = Field(default=PropertyType.HOME, alias="propertyType")
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def property_type_for_api(self) -> str:
        return _API_PROPERTY_TYPES[self.property_type]


# Shared responses


class DeleteResponse(WireModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


# Profile


class ProfileData(WireModel):
    id: str
    name: str = ""
    email: str = ""
    dob: str = ""
    place_of_birth: str = ""
    time_of_birth: str = ""
    contact_id: str = ""
    created_at: str = ""
    updated_at: str = ""


class ProfileResponse(WireModel):
    success: bool
    data: Optional[ProfileData] = None
    error: Optional[str] = None
    message: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.success and self.data is not None


class CreateProfileRequest(WireModel):
    dob: str
    place_of_birth: str
    time_of_birth: str


class UpdateProfileRequest(WireModel):
    dob: Optional[str] = None
    place_of_birth: Optional[str] = None
    time_of_birth: Optional[str] = None


# Property


class PropertyData(WireModel):
    id: str
    name: str
    property_type: str
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    profile_id: Optional[str] = None
    is_active: Optional[bool] = None
    created_at: str = ""
    updated_at: str = ""


class PropertyResponse(WireModel):
    success: bool
    data: Optional[PropertyData] = None
    error: Optional[str] = None
    message: Optional[str] = None


class PropertiesResponse(WireModel):
    success: bool
    data: Optional[list[PropertyData]] = None
    error: Optional[str] = None
    message: Optional[str] = None


class CreatePropertyRequest(WireModel):
    name: str
    property_type: str
    street: str
    city: str
    state: str
    zip: str
    country: str


class UpdatePropertyRequest(WireModel):
    name: Optional[str] = None
    property_type: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


# Room


class QuestionData(WireModel):
    id: str
    room_type: str
    question_text: str
    question_order: int = 0
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""


class AnswerData(WireModel):
    id: str
    room_id: str
    question_id: str
    answer_text: str
    answer_value: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""


class RoomData(WireModel):
    id: str
    name: str
    type: str = Field(alias="room_type")
    property_id: str
    floor_level: Optional[int] = None
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""
    questions: list[QuestionData] = Field(default_factory=list)
    answers: list[AnswerData] = Field(default_factory=list)


class RoomResponse(WireModel):
    success: bool
    data: Optional[RoomData] = None
    error: Optional[str] = None
    message: Optional[str] = None


class RoomsResponse(WireModel):
    success: bool
    data: Optional[list[RoomData]] = None
    error: Optional[str] = None
    message: Optional[str] = None


class CreateRoomRequest(WireModel):
    name: str
    type: str


class UpdateRoomRequest(WireModel):
    name: Optional[str] = None
    type: Optional[str] = None


class RoomQuestion(WireModel):
    id: str
    question: str
    type: str
    options: Optional[list[str]] = None


class RoomQuestionsResponse(WireModel):
    success: bool
    data: list[RoomQuestion] = Field(default_factory=list)
    count: int = 0


class RoomAnswerItem(WireModel):
    question_id: str
    answer: str


class SubmitRoomAnswersRequest(WireModel):
    answers: list[RoomAnswerItem]


class SubmitRoomAnswersResponse(WireModel):
    success: bool
    message: Optional[str] = None


class RoomVastuScore(WireModel):
    room_id: str
    score: float
    max_score: float = Field(alias="maxScore")
    room_name: Optional[str] = None
    percentage: Optional[float] = None
    analysis: Optional[str] = None
    calculated_at: Optional[str] = None

    @property
    def display_percentage(self) -> float:
        if self.percentage is not None:
            return self.percentage
        if self.max_score > 0:
            return (self.score / self.max_score) * 100
        return 0.0


class RoomVastuScoreResponse(WireModel):
    success: bool
    data: RoomVastuScore
    message: Optional[str] = None


# Photo


class PhotoData(WireModel):
    id: str
    room_id: str
    photo_url: str
    cloud_name: str = ""
    folder_name: str = ""
    uri: str = ""
    created_at: str = ""


class PhotoResponse(WireModel):
    success: bool
    data: Optional[PhotoData] = None
    error: Optional[str] = None
    message: Optional[str] = None


class PhotosResponse(WireModel):
    success: bool
    data: Optional[list[PhotoData]] = None
    error: Optional[str] = None
    message: Optional[str] = None


class CreatePhotoRequest(WireModel):
    cloud_name: str
    uri: str


# Remedy


class RemedyStep(WireModel):
    id: str = Field(alias="_id")
    step_number: int = Field(alias="stepNumber")
    description: str
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class Remedy(WireModel):
    id: str = Field(alias="_id")
    name: str
    description: str = ""
    image_url: str = Field(default="", alias="imageUrl")
    room_type: Optional[str] = Field(default=None, alias="roomType")
    issue_type: Optional[str] = Field(default=None, alias="issueType")
    steps: list[RemedyStep] = Field(default_factory=list)


# Identity / tenant


class Contact(WireModel):
    id: str
    gu_id: Optional[str] = Field(default=None, alias="guId")
    email: str = ""
    full_name: str = Field(default="", alias="fullName")
    name: str = ""
    last_name: Optional[str] = Field(default=None, alias="lastName")
    phone: Optional[str] = None
    picture: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    is_email_verified: bool = Field(default=False, alias="isEmailVerified")
    is_first_login: bool = Field(default=False, alias="isFirstLogin")


class Tenant(WireModel):
    name: str = ""
    org_id: Optional[str] = Field(default=None, alias="orgId")
    master_org_id: Optional[str] = Field(default=None, alias="masterOrgId")
    country: Optional[str] = None
    timezone: Optional[str] = None
    environment_name: Optional[str] = Field(default=None, alias="environmentName")
    small_logo: Optional[str] = Field(default=None, alias="smallLogo")
    big_logo: Optional[str] = Field(default=None, alias="bigLogo")
    cloudinary_cloud_name: Optional[str] = Field(default=None, alias="cloudinaryCloudName")
    cloudinary_preset: Optional[str] = Field(default=None, alias="cloudinaryPreset")


class TenantPingResponse(WireModel):
    name: str = ""
    tenant_id: str = Field(default="", alias="tenantId")
    cloud_name: str = Field(default="", alias="cloudName")
    org_id: Optional[str] = Field(default=None, alias="orgId")
    email: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None
    logo: Optional[str] = None


class SignInRequest(WireModel):
    tid: str
    email: str
    password: str
    auth_type: str = Field(default="email", alias="authType")


class GoogleLoginRequest(WireModel):
    tid: str
    org_id: str = Field(alias="orgId")
    id_token: str = Field(alias="idToken")


class SignUpRequest(WireModel):
    name: str
    email: str
    tenant_id: str = Field(alias="tenantId")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    phone: Optional[str] = None
    referral: Optional[str] = None
    interested_in: Optional[str] = Field(default=None, alias="interestedIn")
    lead_source: Optional[str] = Field(default=None, alias="leadSource")
    description: Optional[str] = None
    line1: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None


class AuthTokenResponse(WireModel):
    access_token: str
    refresh_token: str = ""
    email: str = ""
    is_new_profile: bool = Field(default=False, alias="isNewProfile")
    role: str = ""
    contact: Optional[Contact] = None
    tenant: Optional[Tenant] = None
    org_list: Optional[list[str]] = Field(default=None, alias="orgList")


class SignInResponse(AuthTokenResponse):
    pass


class GoogleLoginResponse(AuthTokenResponse):
    pass


class SignUpResponse(AuthTokenResponse):
    message: Optional[str] = None
