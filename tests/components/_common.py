from typing import Any

from httpx import AsyncClient, HTTPStatusError, Response


class IntegrationTestClient:
    def __init__(self, client: AsyncClient):
        self.client = client

    def _json(self, res: Response) -> Any:
        try:
            res.raise_for_status()
        except HTTPStatusError as e:
            raise HTTPStatusError(f"{e}: {res.text}", request=e.request, response=e.response) from e
        return res.json() if res.content else None

    async def get(self, url: str, **kwargs: Any) -> Any:
        return self._json(await self.client.get(url, **kwargs))

    async def post(self, url: str, json: Any, **kwargs: Any) -> Any:
        return self._json(await self.client.post(url, json=json, **kwargs))

    async def put(self, url: str, json: Any = None, **kwargs: Any) -> Any:
        return self._json(await self.client.put(url, json=json, **kwargs))

    async def delete(self, url: str, **kwargs: Any) -> Any:
        return self._json(await self.client.delete(url, **kwargs))

    async def create_dashboard(self, document: dict[str, Any]) -> dict[str, Any]:
        return await self.post("/api/v1/dashboards", json=document)
