from pydantic import BaseModel


class RunReport(BaseModel):
    """Counts reported at the end of one scrape-and-store run."""

    selected: int = 0
    scraped: int = 0
    saved: int = 0
    skipped: int = 0
    failed: int = 0
