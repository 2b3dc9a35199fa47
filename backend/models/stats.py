from pydantic import BaseModel


class Stats(BaseModel):
    total: int
    by_source: dict[str, int]   # source -> count, busiest first
    current_streak: int
    today: int                  # events on the current UTC day


class IngestResult(BaseModel):
    processed: int
    message: str
