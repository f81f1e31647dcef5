from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

from ..timesheets.model import PeriodRef


def build_share_link(base_url: str, employee_id: str, ref: Optional[PeriodRef] = None) -> str:
    """``{base_url}?user={id}[&year=..&month=..&half=..]``

    `month` is 0-based, the same value `PeriodRef.from_query` reads back.
    Any query already on `base_url` is replaced.
    """
    params = {"user": employee_id}
    if ref is not None:
        params.update(ref.to_query())
    scheme, netloc, path, _, _ = urlsplit(base_url)
    return urlunsplit((scheme, netloc, path or "/", urlencode(params), ""))
