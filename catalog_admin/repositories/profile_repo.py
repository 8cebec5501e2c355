# catalog_admin/repositories/profile_repo.py
import httpx
from postgrest.exceptions import APIError
from supabase import Client

from catalog_admin.core.errors import BackendError


class ProfileRepository:
    """
    Reads application roles from the profiles table.

    Must be built on the service-role client: at login time the caller has
    no token yet, so RLS would hide their own profile row.
    """

    def __init__(self, admin_client: Client, table: str = "profiles"):
        self.admin_client = admin_client
        self.table = table

    def get_role(self, user_id: str) -> str | None:
        """Return the profile's role, or None if there is no profile row."""
        try:
            response = (
                self.admin_client.table(self.table)
                .select("role")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except APIError as exc:
            raise BackendError("Error reading profile", exc.message or exc) from exc
        except httpx.HTTPError as exc:
            raise BackendError("Error reading profile", exc) from exc

        rows = response.data or []
        if not rows:
            return None
        return rows[0].get("role")
