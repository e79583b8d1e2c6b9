from typing import Optional, List

from app.schemas.common import CamelModel


class KycStatusResponse(CamelModel):
    status: str
    documents: List[str] = []
    rejection_reason: Optional[str] = None


class KycDecision(CamelModel):
    user_id: int
    reason: Optional[str] = None


class KycDecisionResponse(CamelModel):
    success: bool = True
    message: str
    status: str
