import httpx
from typing import Any, Dict, List, Optional

from stepflow.config import settings
from stepflow.core.logging import get_logger

logger = get_logger("client.api")


class StepflowClientError(Exception):
    def __init__(self, status_code: int, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


def filter_workflows(workflows: List[Dict[str, Any]], query: Optional[str]) -> List[Dict[str, Any]]:
    """
    Keep workflows whose name contains ``query`` (case-insensitive) or whose
    id, written out, contains it. An empty query keeps everything.
    """
    if not query:
        return list(workflows)
    needle = query.lower()
    return [w for w in workflows if needle in str(w.get("name", "")).lower() or query in str(w.get("id", ""))]


class StepflowClient:
    """Async client for the Stepflow HTTP API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.CLIENT_BASE_URL
        self.prefix = settings.API_PREFIX
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout or settings.CLIENT_TIMEOUT),
            transport=transport,
        )

    async def __aenter__(self) -> "StepflowClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._client.is_closed:
            await self._client.aclose()

    async def _request(self, method: str, url: str, json: Any = None) -> Any:
        response = await self._client.request(method, url, json=json)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") if isinstance(body, dict) else None
            errors = body.get("errors") if isinstance(body, dict) else None
            logger.warning(f"{method} {url} failed with {response.status_code}")
            raise StepflowClientError(response.status_code, message or response.reason_phrase, errors)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", f"{self.prefix}/health")

    async def create_user(self, username: str, email: str, password: str) -> Dict[str, Any]:
        return await self._request("POST", f"{self.prefix}/users", json={"username": username, "email": email, "password": password})

    async def list_workflows(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        workflows = await self._request("GET", f"{self.prefix}/workflows")
        return filter_workflows(workflows, search)

    async def get_workflow(self, workflow_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"{self.prefix}/workflows/{workflow_id}")

    async def create_workflow(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"{self.prefix}/workflows", json=payload)

    async def update_workflow(self, workflow_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"{self.prefix}/workflows/{workflow_id}", json=payload)

    async def delete_workflow(self, workflow_id: int) -> None:
        await self._request("DELETE", f"{self.prefix}/workflows/{workflow_id}")

    async def execute_workflow(self, workflow_id: int) -> Dict[str, Any]:
        return await self._request("POST", f"{self.prefix}/workflows/{workflow_id}/execute", json={})

    async def list_executions(self, workflow_id: int) -> List[Dict[str, Any]]:
        return await self._request("GET", f"{self.prefix}/workflows/{workflow_id}/executions")

    async def validate_workflow(self, workflow_id: int) -> Dict[str, Any]:
        return await self._request("POST", f"{self.prefix}/workflows/{workflow_id}/validate")
