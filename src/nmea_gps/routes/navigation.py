from fastapi import APIRouter, Request

from nmea_gps.models import NavigationResponse, SentenceBatchRequest
from nmea_gps.sentence_parser import SentenceParser

router = APIRouter(tags=["navigation"])


def _response(parser: SentenceParser) -> NavigationResponse:
    return NavigationResponse.from_state(parser.snapshot(), parser.stats)


@router.get("/navigation", response_model=NavigationResponse)
async def get_navigation(request: Request) -> NavigationResponse:
    return _response(request.app.state.parser)


@router.post("/sentences", response_model=NavigationResponse)
async def post_sentences(req: SentenceBatchRequest, request: Request) -> NavigationResponse:
    parser = request.app.state.parser
    for line in req.lines:
        parser.parse_sentence(line)
    return _response(parser)
