from japama.schemas.user import (
    UserCreate, UserLogin, UserOut, UserBrief, UserUpdate, LoginResponse,
    MessageResponse, VerifyCodeRequest, ResendVerificationRequest,
)
from japama.schemas.geography import (
    SubdivisionCreate, SubdivisionUpdate, SubdivisionOut, SubdivisionBrief,
    StreetCreate, StreetUpdate, StreetOut, StreetBrief,
    HouseCreate, HouseUpdate, HouseOut, HouseBrief,
)
from japama.schemas.billing import (
    ReportCreate, ReportUpdate, ReportOut, PaymentCreate, PaymentOut,
)
