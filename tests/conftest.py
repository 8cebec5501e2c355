"""Shared fixtures: environment, in-memory Supabase fakes and a TestClient."""

import os

os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from storage3.utils import StorageException

from catalog_admin.core.config import get_settings
from catalog_admin.core.errors import BackendError
from catalog_admin.core.identity import InvalidCredentialsError
from catalog_admin.core.storage_utils import ImageStorage
from catalog_admin.core.tokens import TokenCodec
from catalog_admin.main import app
from catalog_admin.routers.dependencies import (
    get_identity_provider,
    get_image_storage,
    get_product_repository,
    get_profile_repository,
)
from catalog_admin.schemas.auth import AuthenticatedUser, IdentityClaim

PUBLIC_BASE = "https://test.supabase.co/storage/v1/object/public/product-images"


class FakeProductRepository:
    """In-memory stand-in for ProductRepository."""

    def __init__(self):
        self.rows: dict[int, dict] = {}
        self.next_id = 1
        self.failing: set[str] = set()

    def _check(self, op: str) -> None:
        if op in self.failing:
            raise BackendError(f"Error during {op}", "database unavailable")

    def add(self, **values) -> dict:
        row = {"id": self.next_id, **values}
        self.rows[self.next_id] = row
        self.next_id += 1
        return row

    def list(self):
        self._check("list")
        return [self.rows[k] for k in sorted(self.rows)]

    def get_by_id(self, product_id, elevated=False):
        self._check("get_by_id")
        return self.rows.get(product_id)

    def get_by_slug(self, slug):
        self._check("get_by_slug")
        return next((r for r in self.rows.values() if r.get("slug") == slug), None)

    def insert(self, values):
        self._check("insert")
        return self.add(**values)

    def update(self, product_id, values):
        self._check("update")
        row = self.rows.get(product_id)
        if row is None:
            return None
        row.update(values)
        return row

    def delete(self, product_id):
        self._check("delete")
        self.rows.pop(product_id, None)


class FakeBucket:
    """In-memory stand-in for a storage3 bucket proxy."""

    def __init__(self):
        self.objects: dict[str, dict] = {}
        self.fail_upload = False
        self.fail_remove = False
        self.remove_error: Exception | None = None
        self.public_urls = True
        self.removed: list[str] = []

    def upload(self, path, content, options):
        if self.fail_upload:
            raise StorageException("upload rejected")
        self.objects[path] = {
            "content": content,
            "mimetype": options.get("content-type"),
            "created_at": "2026-10-17T10:00:00.000Z",
        }
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        if not self.public_urls:
            return f"{PUBLIC_BASE}/undefined"
        return f"{PUBLIC_BASE}/{path}"

    def create_signed_url(self, path, expires_in):
        return {"signedURL": f"https://test.supabase.co/storage/v1/object/sign/{path}?token=t&ttl={expires_in}"}

    def remove(self, paths):
        if self.remove_error is not None:
            raise self.remove_error
        if self.fail_remove:
            raise StorageException("remove rejected")
        removed = []
        for path in paths:
            if self.objects.pop(path, None) is not None:
                removed.append({"name": path})
            self.removed.append(path)
        return removed

    def list(self, folder, options):
        prefix = f"{folder}/"
        entries = []
        for i, (path, obj) in enumerate(self.objects.items()):
            if not path.startswith(prefix):
                continue
            entries.append(
                {
                    "id": f"obj-{i}",
                    "name": path[len(prefix):],
                    "created_at": obj["created_at"],
                    "metadata": {"size": len(obj["content"]), "mimetype": obj["mimetype"]},
                }
            )
        return entries


class FakeStorageClient:
    def __init__(self, bucket: FakeBucket):
        self.storage = SimpleNamespace(from_=lambda name: bucket)


class FakeIdentityProvider:
    def __init__(self):
        self.users: dict[str, tuple[str, str]] = {}
        self.return_no_user = False

    def sign_in(self, email, password):
        known = self.users.get(email)
        if known is None or known[0] != password:
            raise InvalidCredentialsError("Invalid login credentials")
        if self.return_no_user:
            return None
        return AuthenticatedUser(id=known[1], email=email)


class FakeProfileRepository:
    def __init__(self):
        self.roles: dict[str, str] = {}
        self.fail = False

    def get_role(self, user_id):
        if self.fail:
            raise BackendError("Error reading profile", "permission denied")
        return self.roles.get(user_id)


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def codec(settings):
    return TokenCodec(settings.JWT_SECRET)


@pytest.fixture
def repo():
    return FakeProductRepository()


@pytest.fixture
def bucket():
    return FakeBucket()


@pytest.fixture
def storage(bucket):
    return ImageStorage(FakeStorageClient(bucket), bucket="product-images", folder="products")


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def profiles():
    return FakeProfileRepository()


@pytest.fixture
def client(repo, storage, identity, profiles):
    app.dependency_overrides[get_product_repository] = lambda: repo
    app.dependency_overrides[get_image_storage] = lambda: storage
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_profile_repository] = lambda: profiles
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(codec):
    token = codec.issue(IdentityClaim(id="admin-1", email="admin@example.com", role="admin"))
    return {"Authorization": f"Bearer {token}"}
