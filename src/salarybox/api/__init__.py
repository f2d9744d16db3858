"""REST API and HTML page for salary box plots."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from salarybox.analysis import AnalysisResult, analyze
from salarybox.api.schemas import (
    AnalysisResponse,
    ColumnOverridesPayload,
    DatasetSummaryResponse,
    TableResponse,
)
from salarybox.config import (
    DEFAULT_PROFILE,
    FILTER_CHOICES,
    GROUP_BY_CHOICES,
    PROFILE_CHOICES,
    FilterMode,
    GroupBy,
)
from salarybox.ingest import DecodeError, MissingColumnError, read_table
from salarybox.render import (
    TableView,
    build_box_figure,
    describe_mode,
    figure_to_html,
    figure_to_json,
    highlight_table,
    preview_table,
)
from salarybox.session import DatasetSession, SessionStore


logger = logging.getLogger(__name__)


def _parse_columns(columns_str: str | None) -> dict[str, str]:
    if not columns_str:
        return {}
    try:
        payload = ColumnOverridesPayload.model_validate(json.loads(columns_str))
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid columns JSON: {exc}") from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid columns mapping: {exc}") from exc
    return payload.as_mapping()


async def _read_upload(upload: UploadFile | None) -> tuple[str, bytes | None]:
    if upload is None:
        return "", None
    contents = await upload.read()
    if not contents:
        return upload.filename or "", None
    return upload.filename or "", contents


def _table_to_response(table: TableView) -> TableResponse:
    return TableResponse(headers=table.headers, rows=table.rows, note=table.note)


def _session_to_summary(session: DatasetSession) -> DatasetSummaryResponse:
    return DatasetSummaryResponse(
        source_name=session.source_name,
        row_count=session.row_count,
        fields=list(session.fields),
        binding=session.binding,
        loaded_at=session.loaded_at,
    )


def _result_to_response(result: AnalysisResult) -> AnalysisResponse:
    return AnalysisResponse(
        status=result.status,
        group_by=result.group_by,
        filter=result.filter_mode,
        description=describe_mode(result.group_by, result.filter_mode),
        distributions=list(result.distributions),
        highlights=list(result.highlights),
        highlight_table=_table_to_response(highlight_table(result)),
        dropped_rows=result.dropped_rows,
    )


def _render_page(body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"utf-8\">
    <title>Salary Box Plots</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 2rem; background: #f5f7fa; }}
        main {{ background: #fff; padding: 2rem; border-radius: 12px; box-shadow: 0 2px 6px rgba(0,0,0,0.08); }}
        nav a {{ margin-right: 1rem; color: #2563eb; text-decoration: none; }}
        form {{ display: flex; gap: 1rem; flex-wrap: wrap; align-items: flex-end; margin-bottom: 1.5rem; }}
        form label {{ display: flex; flex-direction: column; font-weight: 600; }}
        form select, form input {{ margin-top: 0.35rem; padding: 0.4rem; border-radius: 6px; border: 1px solid #cbd5e1; }}
        button {{ padding: 0.6rem 1.2rem; border-radius: 6px; border: none; background: #2563eb; color: #fff; cursor: pointer; }}
        table {{ border-collapse: collapse; width: 100%; margin-top: 1rem; }}
        th, td {{ padding: 0.5rem; border: 1px solid #e2e8f0; text-align: left; }}
        .table-wrapper {{ max-height: 360px; overflow: auto; }}
        .flash {{ padding: 1rem; border-radius: 6px; margin-bottom: 1rem; }}
        .flash.success {{ background: #ecfdf5; color: #047857; }}
        .flash.error {{ background: #fef2f2; color: #b91c1c; }}
        .hint {{ color: #475569; margin: 0.5rem 0; }}
    </style>
</head>
<body>
    <nav><a href=\"/ui\">Home</a></nav>
    <main>{body}</main>
</body>
</html>"""


def _render_table(table: TableView) -> str:
    note_html = f"<p class=\"hint\">{escape(table.note)}</p>" if table.note else ""
    if table.is_empty:
        return note_html
    head = "".join(f"<th>{escape(header)}</th>" for header in table.headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>"
        for row in table.rows
    )
    return (
        f"{note_html}<div class=\"table-wrapper\"><table><thead><tr>{head}</tr></thead>"
        f"<tbody>{body}</tbody></table></div>"
    )


def _options(choices: list[tuple[str, str]] | dict[str, str], selected: str) -> str:
    items = choices.items() if isinstance(choices, dict) else choices
    return "".join(
        f"<option value=\"{escape(value)}\"{' selected' if value == selected else ''}>{escape(label)}</option>"
        for value, label in items
    )


def _render_index_page(
    *,
    session: DatasetSession | None,
    result: AnalysisResult,
    error: str | None = None,
    success: str | None = None,
    keywords_value: str = DEFAULT_PROFILE,
) -> str:
    flash = ""
    if error:
        flash += f"<div class=\"flash error\">{escape(error)}</div>"
    if success:
        flash += f"<div class=\"flash success\">{escape(success)}</div>"

    loaded = ""
    if session is not None:
        binding = session.binding
        loaded = (
            f"<p class=\"hint\">Loaded {escape(session.source_name or 'dataset')}: "
            f"{session.row_count} rows. Team column: {escape(binding.team)}, "
            f"position column: {escape(binding.position)}, salary column: {escape(binding.salary)}, "
            f"player column: {escape(binding.name or '-')}.</p>"
        )

    chart_html = figure_to_html(build_box_figure(result))

    return _render_page(
        f"""
        <h1>Salary Box Plots</h1>
        {flash}
        <form method=\"post\" action=\"/ui\" enctype=\"multipart/form-data\">
            <label>Spreadsheet (.xlsx or .csv)
                <input type=\"file\" name=\"file\" accept=\".xlsx,.xlsm,.csv\">
            </label>
            <label>Header language
                <select name=\"keywords\">{_options(dict(PROFILE_CHOICES), keywords_value)}</select>
            </label>
            <input type=\"hidden\" name=\"group_by\" value=\"{escape(result.group_by)}\">
            <input type=\"hidden\" name=\"filter\" value=\"{escape(result.filter_mode)}\">
            <button type=\"submit\">Upload</button>
        </form>
        {loaded}
        <form method=\"get\" action=\"/ui\">
            <label>Group by
                <select name=\"group_by\" onchange=\"this.form.submit()\">{_options(GROUP_BY_CHOICES, result.group_by)}</select>
            </label>
            <label>Filter
                <select name=\"filter\" onchange=\"this.form.submit()\">{_options(FILTER_CHOICES, result.filter_mode)}</select>
            </label>
            <noscript><button type=\"submit\">Update</button></noscript>
        </form>
        <p class=\"hint\">{escape(describe_mode(result.group_by, result.filter_mode))}</p>
        <section>{chart_html}</section>
        <section>
            <h2>Outliers / top salaries</h2>
            {_render_table(highlight_table(result))}
        </section>
        <section>
            <h2>Loaded data</h2>
            {_render_table(preview_table(session))}
        </section>
        """
    )


def create_app() -> FastAPI:
    app = FastAPI(title="salarybox")
    store = SessionStore()
    app.state.session_store = store

    def _load(contents: bytes, filename: str, *, keywords: str, overrides: dict[str, str]) -> DatasetSession:
        records = read_table(contents, filename)
        try:
            return store.load(
                records,
                source_name=filename,
                keywords=keywords,
                overrides=overrides,
            )
        except MissingColumnError:
            logger.warning("Rejected %s: mandatory columns missing", filename)
            raise

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/dataset", response_model=DatasetSummaryResponse)
    async def upload_dataset(
        file: UploadFile = File(...),
        columns: str | None = Form(None),
        keywords: str = Form(DEFAULT_PROFILE),
    ) -> DatasetSummaryResponse:
        overrides = _parse_columns(columns)
        if keywords not in PROFILE_CHOICES:
            raise HTTPException(status_code=400, detail=f"Unknown keywords profile {keywords!r}")
        filename, contents = await _read_upload(file)
        if contents is None:
            raise HTTPException(status_code=400, detail="uploaded file is empty")
        try:
            session = _load(contents, filename, keywords=keywords, overrides=overrides)
        except DecodeError as exc:
            logger.warning("Rejected %s: %s", filename, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except MissingColumnError as exc:
            raise HTTPException(
                status_code=422,
                detail={"message": str(exc), "missing": list(exc.missing), "available": list(exc.available)},
            ) from exc
        return _session_to_summary(session)

    @app.get("/dataset", response_model=DatasetSummaryResponse)
    async def get_dataset() -> DatasetSummaryResponse:
        session = store.current
        if session is None:
            raise HTTPException(status_code=404, detail="no dataset loaded")
        return _session_to_summary(session)

    @app.delete("/dataset")
    async def clear_dataset() -> dict[str, str]:
        store.reset()
        return {"status": "cleared"}

    @app.get("/dataset/preview", response_model=TableResponse)
    async def dataset_preview() -> TableResponse:
        session = store.current
        if session is None:
            raise HTTPException(status_code=404, detail="no dataset loaded")
        return _table_to_response(preview_table(session))

    @app.get("/analysis", response_model=AnalysisResponse)
    async def get_analysis(
        group_by: GroupBy = Query("team"),
        filter_mode: FilterMode = Query("none", alias="filter"),
    ) -> AnalysisResponse:
        result = analyze(store.current, group_by=group_by, filter_mode=filter_mode)
        return _result_to_response(result)

    @app.get("/analysis/figure")
    async def get_figure(
        group_by: GroupBy = Query("team"),
        filter_mode: FilterMode = Query("none", alias="filter"),
    ) -> dict[str, Any]:
        result = analyze(store.current, group_by=group_by, filter_mode=filter_mode)
        return figure_to_json(build_box_figure(result))

    @app.get("/ui", response_class=HTMLResponse)
    async def ui_index(
        group_by: GroupBy = Query("team"),
        filter_mode: FilterMode = Query("none", alias="filter"),
    ):
        session = store.current
        result = analyze(session, group_by=group_by, filter_mode=filter_mode)
        return HTMLResponse(_render_index_page(session=session, result=result))

    @app.post("/ui", response_class=HTMLResponse)
    async def ui_upload(
        file: UploadFile | None = File(None),
        keywords: str = Form(DEFAULT_PROFILE),
        group_by: GroupBy = Form("team"),
        filter_mode: FilterMode = Form("none", alias="filter"),
    ):
        error: str | None = None
        success: str | None = None
        if keywords not in PROFILE_CHOICES:
            keywords = DEFAULT_PROFILE
        filename, contents = await _read_upload(file)
        if contents is None:
            error = "Choose a spreadsheet to upload."
        else:
            try:
                session = _load(contents, filename, keywords=keywords, overrides={})
                success = f"Loaded {session.row_count} rows from {filename}."
            except DecodeError as exc:
                logger.warning("Rejected %s: %s", filename, exc)
                error = f"Could not read the file: {exc}"
            except MissingColumnError as exc:
                error = (
                    "Could not find columns for "
                    f"{', '.join(exc.missing)}. Check the header row of the first sheet. "
                    f"Columns found: {', '.join(exc.available) or '(none)'}"
                )

        session = store.current
        result = analyze(session, group_by=group_by, filter_mode=filter_mode)
        content = _render_index_page(
            session=session,
            result=result,
            error=error,
            success=success,
            keywords_value=keywords,
        )
        return HTMLResponse(content, status_code=200 if error is None else 400)

    return app


__all__ = ["create_app"]
