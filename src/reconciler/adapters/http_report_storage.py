from __future__ import annotations

from urllib.parse import quote

import requests

from reconciler.ports.report_storage_port import ReportStoragePort


class HttpReportStorage(ReportStoragePort):
    def __init__(
        self, base_url: str, bucket: str, service_key: str, timeout: float = 20
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._bucket = bucket
        self._service_key = service_key
        self._timeout = timeout

    def download_report(self, storage_path: str) -> bytes:
        url = (
            f"{self._base_url}/storage/v1/object/{quote(self._bucket)}/"
            f"{quote(storage_path.lstrip('/'))}"
        )
        try:
            response = requests.get(url, headers=self._auth_header(), timeout=self._timeout)
        except requests.RequestException as exc:
            raise RuntimeError(f"Storage request failed for {storage_path}") from exc
        self._raise_for_status(response, context=f"download {storage_path}")
        return response.content

    def _auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._service_key}"}

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        if response.status_code in (401, 403):
            raise RuntimeError(f"Auth failed while attempting to {context}.")
        if response.status_code == 404:
            raise RuntimeError(f"Report not found while attempting to {context}.")
        if response.status_code >= 400:
            raise RuntimeError(
                f"Storage API error {response.status_code} while attempting to {context}."
            )
