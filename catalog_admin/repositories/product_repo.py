# catalog_admin/repositories/product_repo.py
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from catalog_admin.core.errors import BackendError


class ProductRepository:
    """
    Data access layer for the products table.

    - Reads go through the restricted (anon) client, writes through the
      elevated (service role) client.
    - Returns plain row dicts; "no row" is None, a failed call (API error
      or transport error) is BackendError.
    - No FastAPI, no business logic.
    """

    def __init__(self, client: Client, admin_client: Client, table: str = "products"):
        self.client = client
        self.admin_client = admin_client
        self.table = table

    @staticmethod
    def _execute(query, action: str) -> list[dict[str, Any]]:
        try:
            response = query.execute()
        except APIError as exc:
            raise BackendError(action, exc.message or exc) from exc
        except httpx.HTTPError as exc:
            raise BackendError(action, exc) from exc
        return response.data or []

    def list(self) -> list[dict[str, Any]]:
        query = self.client.table(self.table).select("*").order("id")
        return self._execute(query, "Error fetching products")

    def get_by_id(self, product_id: int, elevated: bool = False) -> dict[str, Any] | None:
        """
        Single row by id.

        `elevated=True` reads through the service-role client; used before
        writes so RLS cannot hide the row being modified.
        """
        client = self.admin_client if elevated else self.client
        query = client.table(self.table).select("*").eq("id", product_id).limit(1)
        rows = self._execute(query, "Error fetching product")
        return rows[0] if rows else None

    def get_by_slug(self, slug: str) -> dict[str, Any] | None:
        query = self.client.table(self.table).select("*").eq("slug", slug).limit(1)
        rows = self._execute(query, "Error fetching product by slug")
        return rows[0] if rows else None

    def insert(self, values: dict[str, Any]) -> dict[str, Any]:
        query = self.admin_client.table(self.table).insert(values)
        rows = self._execute(query, "Error creating product")
        if not rows:
            raise BackendError("Error creating product", "insert returned no row")
        return rows[0]

    def update(self, product_id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        query = self.admin_client.table(self.table).update(values).eq("id", product_id)
        rows = self._execute(query, "Error updating product")
        return rows[0] if rows else None

    def delete(self, product_id: int) -> None:
        query = self.admin_client.table(self.table).delete().eq("id", product_id)
        self._execute(query, "Error deleting product")
