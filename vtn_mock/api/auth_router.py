from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ..auth.token_grant import StaticTokenIssuer
from .deps import get_token_issuer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_class=PlainTextResponse)
async def issue_token(request: Request, issuer: StaticTokenIssuer = Depends(get_token_issuer)):
    """Static client-credentials grant; see StaticTokenIssuer."""
    form = await request.form()
    return issuer.issue(request.headers.get("Authorization"), form.multi_items())
