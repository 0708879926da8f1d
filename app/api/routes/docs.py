from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter(include_in_schema=False)


# Must be included after every other router, it matches any GET path.
@router.get("/{path:path}")
def redirect_to_docs(path: str):  # pylint: disable=unused-argument
    """Send unknown GET paths to the interactive API documentation."""
    return RedirectResponse(url="/docs")
