from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional

import pandas as pd
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from pharma_browser.core.exceptions import LoadError
from pharma_browser.core.period_store import LoadRequest
from pharma_browser.core.records import WIRE_NAMES, RecordSet
from pharma_browser.validation.record_validation import warn_on_invalid_records

logger = logging.getLogger(__name__)


class RecordSource(ABC):
    """
    Abstract interface for where period records come from (results API,
    local CSV exports, ...).

    `fetch_records` must raise LoadError (or a subclass) for every failure
    the UI should report; the period store relies on that to keep its last
    good record set.
    """

    @abstractmethod
    def list_periods(self) -> List[str]:
        """Available periods, in the order the selector should show them."""
        pass

    @abstractmethod
    def list_companies(self) -> List[str]:
        pass

    @abstractmethod
    def list_countries(self) -> List[str]:
        pass

    @abstractmethod
    def fetch_records(self, request: LoadRequest) -> RecordSet:
        pass

    def __call__(self, request: LoadRequest) -> RecordSet:
        records = self.fetch_records(request)
        warn_on_invalid_records(records, logger)
        return records


def build_http_session(retries: int = 3) -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    adapter = HTTPAdapter(
        max_retries=Retry(
            total=retries,
            backoff_factor=0.3,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        ),
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class ApiRecordSource(RecordSource):
    """
    Records from the results backend.

    Endpoints (relative to base_url):
        GET /quarters
        GET /companies
        GET /countries
        GET /drugs?quarter=<period>
        GET /company-details?companyName=<company>&quarter=<period>

    The backend only serves country *summaries*, so country-scoped requests
    fetch the period rows and keep the ones of that country.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 20.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else build_http_session()

    def _get_json(self, path: str, params: Optional[dict] = None,
                  request: Optional[LoadRequest] = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
            return r.json()
        except requests.exceptions.Timeout:
            raise LoadError(f"Request to {url} timed out after {self.timeout}s", request) from None
        except requests.exceptions.RequestException as e:
            raise LoadError(f"Request to {url} failed: {e}", request) from e
        except ValueError as e:
            # r.json() on a non-JSON body
            raise LoadError(f"Response from {url} is not valid JSON", request) from e

    def _get_list(self, path: str, params: Optional[dict] = None,
                  request: Optional[LoadRequest] = None) -> list:
        data = self._get_json(path, params=params, request=request)
        if not isinstance(data, list):
            raise LoadError(f"Expected a JSON list from /{path}, got {type(data).__name__}", request)
        return data

    def list_periods(self) -> List[str]:
        return [str(q) for q in self._get_list("quarters")]

    def list_companies(self) -> List[str]:
        return [str(c) for c in self._get_list("companies")]

    def list_countries(self) -> List[str]:
        return [str(c) for c in self._get_list("countries")]

    def fetch_records(self, request: LoadRequest) -> RecordSet:
        if request.company is None:
            rows = self._get_list("drugs", {"quarter": request.period}, request)
        else:
            rows = self._get_list(
                "company-details",
                {"companyName": request.company, "quarter": request.period},
                request,
            )

        if request.country is not None:
            column = WIRE_NAMES["country_name"]
            rows = [r for r in rows if not isinstance(r, dict) or r.get(column) == request.country]

        return _records_for(request, rows)


class LocalRecordSource(RecordSource):
    """
    Records from CSV files laid out as:

        data_root/
            2024Q1.csv
            2024Q2.csv
            ...

    Files use the wire column names, i.e. exactly what the table export
    writes, so an exported CSV can be dropped in as a period file.
    """

    def __init__(self, data_root: Path):
        self.data_root = Path(data_root)

    def _path_for(self, period: str) -> Path:
        path = (self.data_root / f"{period}.csv").resolve()
        # Period keys come from the UI; keep them inside data_root
        if path.parent != self.data_root.resolve():
            raise LoadError(f"Invalid period key '{period}'")
        return path

    def list_periods(self) -> List[str]:
        if not self.data_root.is_dir():
            logger.warning(f"Data root not found at: {self.data_root}")
            return []
        # Newest period first, matching the API's ordering
        return sorted((p.stem for p in self.data_root.glob("*.csv") if not p.name.startswith("._")), reverse=True)

    def _read(self, period: str, request: Optional[LoadRequest] = None) -> pd.DataFrame:
        path = self._path_for(period)
        if not path.is_file():
            raise LoadError(f"No data for period '{period}'", request)
        try:
            return pd.read_csv(path, dtype=str, keep_default_na=False)
        except (OSError, pd.errors.ParserError, UnicodeDecodeError) as e:
            raise LoadError(f"Could not read {path.name}: {e}", request) from e

    def _distinct(self, field_name: str) -> List[str]:
        column = WIRE_NAMES[field_name]
        values: set[str] = set()
        for period in self.list_periods():
            try:
                raw = self._read(period)
            except LoadError:
                logger.exception("Skipping unreadable period file", extra={"period": period})
                continue
            if column in raw.columns:
                values.update(raw[column])
        return sorted(values)

    def list_companies(self) -> List[str]:
        return self._distinct("company_name")

    def list_countries(self) -> List[str]:
        return self._distinct("country_name")

    def fetch_records(self, request: LoadRequest) -> RecordSet:
        raw = self._read(request.period, request)
        for field_name, value in (("company_name", request.company), ("country_name", request.country)):
            if value is None:
                continue
            column = WIRE_NAMES[field_name]
            if column not in raw.columns:
                raise LoadError(f"Period file for '{request.period}' has no '{column}' column", request)
            raw = raw[raw[column] == value]
        return _records_for(request, raw.to_dict("records"))


def _records_for(request: LoadRequest, rows: list) -> RecordSet:
    try:
        return RecordSet.from_wire(
            request.period, rows, company=request.company, country=request.country
        )
    except LoadError as e:
        e.request = request
        raise
