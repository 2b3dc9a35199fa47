from models.event import EventIn, EventOut
from models.stats import Stats, IngestResult

__all__ = ["EventIn", "EventOut", "Stats", "IngestResult"]
