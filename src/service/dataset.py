from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path

import httpx
import pandas as pd

from pricing.config import DATASET_COLUMNS, PricingConfig
from pricing.data_models import DatasetLoadError, Row

logger = logging.getLogger(__name__)

_NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def parse_rows(text: str) -> tuple[Row, ...]:
    """Parse CSV text with a header row into Row records.

    Columns are mapped by header name. Unknown columns are ignored and missing
    ones are left empty; blank lines are skipped.
    """
    if not text.strip():
        return ()
    try:
        frame = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as exc:
        raise DatasetLoadError(f"could not parse dataset: {exc}") from exc

    frame.columns = [str(c).strip() for c in frame.columns]
    frame = frame.reindex(columns=list(DATASET_COLUMNS), fill_value="")
    frame = frame[(frame != "").any(axis=1)]
    return tuple(Row(**record) for record in frame.to_dict(orient="records"))


class DatasetLoader:
    def __init__(
        self,
        source: str,
        config: PricingConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.source = source
        self.config = config or PricingConfig()
        self._transport = transport
        self.loading = False
        self.error: str | None = None
        self.rows: tuple[Row, ...] = ()

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    async def _fetch_text(self) -> str:
        if self.is_remote:
            try:
                async with httpx.AsyncClient(transport=self._transport) as client:
                    resp = await client.get(self.source, headers=_NO_CACHE_HEADERS)
                    resp.raise_for_status()
            except httpx.HTTPError as exc:
                raise DatasetLoadError(f"could not fetch {self.source}: {exc}") from exc
            return resp.text

        try:
            return await asyncio.to_thread(Path(self.source).read_text, encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise DatasetLoadError(f"could not read {self.source}: {exc}") from exc

    async def load(self) -> tuple[Row, ...]:
        self.loading = True
        self.error = None
        try:
            rows = parse_rows(await self._fetch_text())
        except DatasetLoadError as exc:
            logger.warning("Dataset load failed: %s", exc)
            self.error = self.config.dataset_load_error
            rows = ()
        else:
            logger.info("Dataset loaded from %s: %d rows", self.source, len(rows))
        finally:
            self.loading = False

        self.rows = rows
        return rows
