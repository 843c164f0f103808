from fastapi import Request

from app.utils.sleep_predictor import SleepPredictor


async def get_predictor(request: Request) -> SleepPredictor:
    return request.app.state.predictor
