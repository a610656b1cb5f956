# services/schedule_remote.py
# Supabase(PostgREST) REST wrapper for the schedules table
# - select ordered by start_time / insert returning the row / patch and delete by id
import logging, requests
from typing import Dict, List, Optional

from schemas.schedule_schema import ScheduleCreate, ScheduleOut, ScheduleUpdate
from services.schedule_table import StoreError

logger = logging.getLogger(__name__)


class RestScheduleTable:
    """
    Schedules table exposed by PostgREST under ``{base_url}/rest/v1/{table}``.

    :param base_url: project URL, e.g. ``https://xyz.supabase.co``
    :type base_url: str
    :param api_key: anon/service key, sent as ``apikey`` and as bearer token
    :type api_key: str
    :param table: table name
    :type table: str
    :param timeout: per-request timeout in seconds
    :type timeout: float
    """

    def __init__(self, base_url: str, api_key: str, table: str = "schedules", timeout: float = 15):
        self.url = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _send(self, method: str, op: str, **kwargs) -> requests.Response:
        """
        Sends one request and maps transport errors and non-2xx answers to StoreError.

        :param method: HTTP method name ("get", "post", "patch", "delete")
        :type method: str
        :param op: operation name for logs and errors
        :type op: str
        :return: successful response
        :rtype: requests.Response
        :raises StoreError: network failure or non-2xx status
        """

        try:
            r = getattr(requests, method)(self.url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise StoreError(f"{op} failed: {e}") from e
        if not r.ok:
            logger.error("Schedules %s failed(%s) | %s", op, r.status_code, r.text)
            raise StoreError(f"{op} failed with status {r.status_code}")
        return r

    def _rows(self, r: requests.Response, op: str) -> List[ScheduleOut]:
        try:
            return [ScheduleOut.model_validate(row) for row in r.json()]
        except ValueError as e:
            # invalid JSON or a row that does not look like a schedule
            raise StoreError(f"{op} returned an unreadable body: {e}") from e

    def select_all(self) -> List[ScheduleOut]:
        r = self._send(
            "get", "select",
            headers=self._headers(),
            params={"select": "*", "order": "start_time.asc"},
        )
        return self._rows(r, "select")

    def insert(self, payload: ScheduleCreate) -> ScheduleOut:
        r = self._send(
            "post", "insert",
            headers=self._headers({"Prefer": "return=representation"}),
            json=[payload.model_dump(mode="json")],
        )
        rows = self._rows(r, "insert")
        if not rows:
            raise StoreError("insert returned no row")
        return rows[0]

    def update(self, schedule_id: str, patch: ScheduleUpdate) -> None:
        self._send(
            "patch", "update",
            headers=self._headers(),
            params={"id": f"eq.{schedule_id}"},
            json=patch.model_dump(mode="json", exclude_unset=True),
        )

    def delete(self, schedule_id: str) -> None:
        self._send(
            "delete", "delete",
            headers=self._headers(),
            params={"id": f"eq.{schedule_id}"},
        )
