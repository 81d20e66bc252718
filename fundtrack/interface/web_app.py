"""Mini README: FastAPI service behind the fund tracking dashboard.

Structure:
    * create_application - factory wiring the record store, storage and AI.
    * Record routes - transactions, diesel logs and categories.
    * Projection routes - summary cards, day ledger, diesel reconciliation,
      category distribution and calendar helpers.
    * Report routes - CSV downloads, AI insights and manual save.

The store is created (or loaded from disk) once per application and shared by
every route. Mutations trigger the debounced autosave; projections are
recomputed on each request. Destructive routes require ``confirm=true`` and
answer 428 otherwise, leaving the store untouched.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date
from typing import Optional

from fastapi import FastAPI, Form, HTTPException, Query
from fastapi.responses import JSONResponse, Response

from ..configuration import FundTrackSettings, get_settings
from ..export.csv_exporter import DIESEL_REPORT, TRANSACTIONS_REPORT, diesel_logs_to_csv, transactions_to_csv
from ..insights import FinancialAdvisor, LiteLLMCompletionClient
from ..ledger import (
    ALL_MONTHS,
    category_shares,
    compute_category_distribution,
    compute_daily_ledger,
    compute_diesel_ledger,
    consumption_by_area,
    consumption_by_vehicle,
    dates_in_month,
    rank_categories,
    reconcile_selected_date,
)
from ..logging_utils import get_logger
from ..records import Account, CategoryError, RecordStore
from ..records.models import parse_date
from ..storage import DebouncedAutosave, JsonLedgerRepository

LOGGER = get_logger(__name__)


def _confirmation_required(prompt: str) -> HTTPException:
    return HTTPException(status_code=428, detail=prompt)


def create_application(
    *,
    store: Optional[RecordStore] = None,
    repository: Optional[JsonLedgerRepository] = None,
    advisor: Optional[FinancialAdvisor] = None,
    settings: Optional[FundTrackSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies.

    ``repository`` defaults to the settings data directory. Autosave always
    writes there, including when ``store`` is supplied, so callers handing in
    their own store should also pass ``settings`` or ``repository`` to choose
    where it is saved.
    """

    settings = settings or get_settings()
    if repository is None:
        repository = JsonLedgerRepository(settings.data_directory)
    if store is None:
        store = repository.load_store()
    autosave = DebouncedAutosave(store, repository, delay=settings.autosave_delay_seconds)
    if advisor is None:
        client = LiteLLMCompletionClient(settings) if settings.ai_enabled else None
        advisor = FinancialAdvisor(client, currency=settings.currency_code)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        autosave.close()
        LOGGER.info("Ledger state flushed on shutdown")

    app = FastAPI(title="Fund Tracking Ledger", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.state.autosave = autosave
    app.state.advisor = advisor

    def _account(value: str) -> Account:
        try:
            return Account.from_str(value)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok", "ai_enabled": advisor.enabled})

    @app.get("/summary")
    async def summary() -> JSONResponse:
        """Return the dashboard cards recomputed from every record."""

        payload = store.summary().as_dict()
        payload["currency"] = settings.currency_code
        payload["last_saved"] = autosave.last_saved_at.isoformat() if autosave.last_saved_at else None
        return JSONResponse(payload)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @app.get("/transactions")
    async def list_transactions(search: Optional[str] = Query(None)) -> JSONResponse:
        """Return transactions newest first, optionally filtered by a search term."""

        transactions = store.list_transactions()
        if search:
            needle = search.strip().lower()
            transactions = [
                txn
                for txn in transactions
                if needle in txn.description.lower() or needle in txn.category.lower()
            ]
        return JSONResponse({"transactions": [txn.as_dict() for txn in transactions]})

    @app.post("/transactions", status_code=201)
    async def create_transaction(
        date_value: str = Form(..., alias="date"),
        description: str = Form(...),
        amount: str = Form(...),
        transaction_type: str = Form("expense", alias="type"),
        mode: str = Form(...),
        category: str = Form("Fund Transfer"),
    ) -> JSONResponse:
        """Record a new fund or expense entry."""

        try:
            transaction = store.add_transaction(
                occurred_on=date_value,
                description=description,
                amount=amount,
                transaction_type=transaction_type,
                account=mode,
                category=category,
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(transaction.as_dict(), status_code=201)

    @app.post("/transactions/parse")
    async def parse_transaction(
        text: str = Form(...),
        commit: bool = Form(False),
    ) -> JSONResponse:
        """Draft (and optionally record) a transaction from a free-text note."""

        draft = await advisor.parse_free_text(text, categories=store.categories)
        if draft is None:
            return JSONResponse({"draft": None, "transaction": None})
        payload = {"draft": draft.as_dict(), "transaction": None}
        if commit:
            try:
                payload["transaction"] = store.add_draft(draft).as_dict()
            except ValueError as error:
                raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(payload)

    @app.get("/transactions/{transaction_id}")
    async def get_transaction(transaction_id: str) -> JSONResponse:
        try:
            transaction = store.get_transaction(transaction_id)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found") from error
        return JSONResponse(transaction.as_dict())

    @app.delete("/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: str, confirm: bool = Query(False)) -> JSONResponse:
        if not confirm:
            raise _confirmation_required("Delete this transaction?")
        if not store.delete_transaction(transaction_id):
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
        return JSONResponse({"deleted": transaction_id})

    # ------------------------------------------------------------------
    # Diesel logs
    # ------------------------------------------------------------------

    @app.get("/diesel-logs")
    async def list_diesel_logs() -> JSONResponse:
        logs = store.list_diesel_logs()
        return JSONResponse(
            {
                "logs": [entry.as_dict() for entry in logs],
                "by_vehicle": {key: float(value) for key, value in consumption_by_vehicle(logs).items()},
                "by_area": {key: float(value) for key, value in consumption_by_area(logs).items()},
            }
        )

    @app.post("/diesel-logs", status_code=201)
    async def create_diesel_log(
        date_value: str = Form(..., alias="date"),
        amount: str = Form(...),
        vehicle: str = Form(...),
        area_code: str = Form(..., alias="areaCode"),
        assigned_staff: str = Form(..., alias="assignedStaff"),
    ) -> JSONResponse:
        """Log a vehicle's fuel cost."""

        try:
            entry = store.add_diesel_log(
                occurred_on=date_value,
                amount=amount,
                vehicle=vehicle,
                area_code=area_code,
                assigned_staff=assigned_staff,
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(entry.as_dict(), status_code=201)

    @app.delete("/diesel-logs/{entry_id}")
    async def delete_diesel_log(entry_id: str, confirm: bool = Query(False)) -> JSONResponse:
        if not confirm:
            raise _confirmation_required("Delete this diesel report?")
        if not store.delete_diesel_log(entry_id):
            raise HTTPException(status_code=404, detail=f"Diesel log {entry_id} not found")
        return JSONResponse({"deleted": entry_id})

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    @app.get("/categories")
    async def list_categories() -> JSONResponse:
        return JSONResponse({"categories": list(store.categories)})

    @app.post("/categories", status_code=201)
    async def create_category(name: str = Form(...)) -> JSONResponse:
        try:
            label = store.add_category(name)
        except CategoryError as error:
            raise HTTPException(status_code=409, detail=str(error)) from error
        return JSONResponse({"category": label, "categories": list(store.categories)}, status_code=201)

    @app.put("/categories/{name:path}")
    async def rename_category(name: str, new_name: str = Form(...)) -> JSONResponse:
        """Rename a category and retag the transactions that use it."""

        try:
            retagged = store.rename_category(name, new_name)
        except CategoryError as error:
            raise HTTPException(status_code=409, detail=str(error)) from error
        except KeyError as error:
            raise HTTPException(status_code=404, detail=f"Category {name} not found") from error
        LOGGER.debug("Category rename %s -> %s touched %s transactions", name, new_name, retagged)
        return JSONResponse({"categories": list(store.categories), "retagged": retagged})

    @app.delete("/categories/{name:path}")
    async def delete_category(name: str, confirm: bool = Query(False)) -> JSONResponse:
        if not confirm:
            raise _confirmation_required(f"Delete category '{name}'? Existing transactions keep it.")
        if not store.delete_category(name):
            raise HTTPException(status_code=404, detail=f"Category {name} not found")
        return JSONResponse({"categories": list(store.categories)})

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    @app.get("/ledger/daily")
    async def daily_ledger(
        account: str = Query(Account.BDO.value),
        day: Optional[str] = Query(None, alias="date"),
    ) -> JSONResponse:
        """Return the selected account's ledger for one day, or ``null`` without a date."""

        ledger = compute_daily_ledger(store.transactions, _account(account), day)
        return JSONResponse({"ledger": ledger.as_dict() if ledger else None})

    @app.get("/ledger/diesel")
    async def diesel_ledger(
        view_mode: str = Query("Daily"),
        day: Optional[str] = Query(None, alias="date"),
        month: Optional[str] = Query(None),
        year: Optional[int] = Query(None),
    ) -> JSONResponse:
        """Reconcile diesel budget against fuel logs; ``null`` when no period is selected."""

        state = store.snapshot()
        ledger = compute_diesel_ledger(
            state.transactions,
            state.diesel_logs,
            view_mode,
            day=day,
            month=month,
            year=year if year is not None else date.today().year,
        )
        return JSONResponse({"ledger": ledger.as_dict() if ledger else None})

    @app.get("/reports/categories")
    async def category_report(
        month: str = Query(ALL_MONTHS),
        ranked: bool = Query(False),
    ) -> JSONResponse:
        """Expense totals per category, optionally for a single month."""

        try:
            distribution = compute_category_distribution(store.transactions, month)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        if ranked:
            distribution = rank_categories(distribution)
        shares = category_shares(distribution)
        return JSONResponse(
            {
                "month": month,
                "categories": [
                    {**item.as_dict(), "share": float(shares[item.category])} for item in distribution
                ],
            }
        )

    @app.get("/calendar")
    async def calendar_dates(
        month: str = Query(...),
        year: Optional[int] = Query(None),
        selected: Optional[str] = Query(None),
    ) -> JSONResponse:
        """Dates of a month plus the selection adjusted to stay inside it."""

        today = date.today()
        target_year = year if year is not None else today.year
        try:
            selected_date = parse_date(selected) if selected else None
            dates = dates_in_month(target_year, month)
            reconciled = reconcile_selected_date(selected_date, month, target_year, today)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(
            {
                "dates": [day.isoformat() for day in dates],
                "selected": reconciled.isoformat() if reconciled else None,
            }
        )

    # ------------------------------------------------------------------
    # Reports, insights and persistence
    # ------------------------------------------------------------------

    @app.get("/export/transactions.csv")
    async def export_transactions() -> Response:
        LOGGER.info("Exporting %s transactions", len(store.transactions))
        return Response(
            transactions_to_csv(store.transactions),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{TRANSACTIONS_REPORT}"'},
        )

    @app.get("/export/diesel-logs.csv")
    async def export_diesel_logs() -> Response:
        LOGGER.info("Exporting %s diesel logs", len(store.diesel_logs))
        return Response(
            diesel_logs_to_csv(store.diesel_logs),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{DIESEL_REPORT}"'},
        )

    @app.get("/insights")
    async def insights() -> JSONResponse:
        """Advisory messages about recent spending; never fails."""

        results = await advisor.get_insights(store.transactions)
        return JSONResponse({"insights": [insight.as_dict() for insight in results]})

    @app.post("/save")
    async def save() -> JSONResponse:
        """Flush the current state to disk immediately."""

        saved = autosave.flush()
        return JSONResponse(
            {
                "saved": saved,
                "last_saved": autosave.last_saved_at.isoformat() if autosave.last_saved_at else None,
            }
        )

    return app
