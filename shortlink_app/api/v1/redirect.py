from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.responses import RedirectResponse
from shortlink_app.services.redirect_resolver import RedirectResolver, RedirectState
from shortlink_app.dependencies import get_redirect_resolver

router = APIRouter(tags=["redirect"])

ERROR_STATUS = {
    RedirectState.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RedirectState.EXPIRED: status.HTTP_410_GONE,
    RedirectState.ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.get("/{short_code}")
async def redirect_to_original_url(
    short_code: str,
    request: Request,
    resolver: RedirectResolver = Depends(get_redirect_resolver)
):
    """
    Redirect to the original URL.

    Flow:
    1. Look up the short code and check expiry
    2. Record the click (referer as source, "web" as location)
    3. Wait the configured delay, then redirect

    Unknown, expired and failed codes get an error with a
    human-readable detail instead of a redirect.
    """
    result = await resolver.resolve(
        short_code,
        source=request.headers.get("referer") or "direct",
        location="web",
    )

    if result.state == RedirectState.REDIRECTING:
        return RedirectResponse(url=result.original_url, status_code=status.HTTP_302_FOUND)

    raise HTTPException(status_code=ERROR_STATUS[result.state], detail=result.message)
