from typing import Any

from fastapi import APIRouter, Body, Depends

from ..dependencies import get_repository
from ..errors import NotFound
from ..models import PreviewRequest, PreviewResponse, Quote, QuoteCreated
from ..pricing import estimate
from ..repository import QuoteRepository
from ..validation import normalize_condition, normalize_service, normalize_size, validate_quote_request

router = APIRouter()


# -------------------------------------------------------------------
# Live preview
# -------------------------------------------------------------------

@router.post("/quote/preview", response_model=PreviewResponse)
def quote_preview(payload: PreviewRequest):
    """
    Price range for the intake form while the visitor is still choosing.
    Nothing is stored; estimate is null until a known service is picked.
    """
    return PreviewResponse(
        estimate=estimate(
            normalize_service(payload.service),
            normalize_size(payload.size),
            normalize_condition(payload.condition),
        )
    )


# -------------------------------------------------------------------
# Submit + view
# -------------------------------------------------------------------

@router.post("/api/quotes", response_model=QuoteCreated)
def create_quote(
    payload: Any = Body(default=None),
    repo: QuoteRepository = Depends(get_repository),
):
    submission = validate_quote_request(payload)
    quote = repo.create(submission)

    return QuoteCreated(
        id=quote.id,
        estimate_low=quote.estimate_low,
        estimate_high=quote.estimate_high,
    )


@router.get("/api/quotes/{quote_id}", response_model=Quote)
def get_quote(quote_id: str, repo: QuoteRepository = Depends(get_repository)):
    quote = repo.get_by_id(quote_id)
    if quote is None:
        raise NotFound()
    return quote
