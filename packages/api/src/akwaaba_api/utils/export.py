"""CSV export of list endpoints."""

from __future__ import annotations

import io
import json
from typing import Any

import polars as pl
from fastapi.responses import StreamingResponse


def _flatten(row: dict[str, Any]) -> dict[str, Any]:
    # Everything goes out as text so polars never has to reconcile column
    # types; nested arrays/objects (features, specializations) as JSON.
    out: dict[str, Any] = {}
    for k, v in row.items():
        if isinstance(v, (list, dict)):
            out[k] = json.dumps(v)
        elif isinstance(v, bool):
            out[k] = "true" if v else "false"
        else:
            out[k] = "" if v is None else str(v)
    return out


def csv_response(data: list[dict[str, Any]], filename: str) -> StreamingResponse:
    if not data:
        content = ""
    else:
        df = pl.DataFrame([_flatten(r) for r in data], infer_schema_length=None)
        buf = io.BytesIO()
        df.write_csv(buf)
        content = buf.getvalue().decode()
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
