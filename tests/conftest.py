"""Pytest configuration and fixtures."""

import asyncio
from types import SimpleNamespace

import pytest


class FakeQuery:
    """Records every builder call and answers execute() with a canned response."""

    def __init__(self, client, kind, name, payload=None):
        self.client = client
        self.kind = kind          # "table" | "rpc"
        self.name = name
        self.payload = payload    # rpc params
        self.calls = []

    def __getattr__(self, attr):
        if attr.startswith("__"):
            raise AttributeError(attr)

        def record(*args, **kwargs):
            self.calls.append((attr, args, kwargs))
            return self

        return record

    @property
    def not_(self):
        self.calls.append(("not_", (), {}))
        return self

    def called(self, name):
        return [(args, kwargs) for (n, args, kwargs) in self.calls if n == name]

    def names(self):
        return [n for (n, _, _) in self.calls]

    async def execute(self):
        self.client.executed.append(self)
        source = self.client.rpc_responses if self.kind == "rpc" else self.client.table_responses
        resp = source.get(self.name)
        if callable(resp):
            resp = resp(self)
        if isinstance(resp, Exception):
            raise resp
        if resp is None:
            resp = SimpleNamespace(data=[], count=None)
        return resp


class FakeSession:
    """Stands in for an httpx.AsyncClient; only tracks whether it was closed."""

    def __init__(self):
        self.closed = False

    async def aclose(self):
        self.closed = True


class FakePostgrest:
    def __init__(self):
        self.session = FakeSession()

    async def aclose(self):
        await self.session.aclose()


class FakeBucket:
    def __init__(self, storage, bucket):
        self.storage = storage
        self.bucket = bucket

    async def list(self, path=None, options=None):
        self.storage.calls.append((self.bucket, path, options))
        listing = self.storage.listings.get(path, [])
        if callable(listing):
            listing = listing(path, options)
        if isinstance(listing, Exception):
            raise listing
        return listing


class FakeStorage:
    def __init__(self):
        self.listings = {}
        self.calls = []
        self.session = FakeSession()

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeAuth:
    def __init__(self):
        self.user_id = "user-1"

    async def get_user(self):
        if not self.user_id:
            return None
        return SimpleNamespace(user=SimpleNamespace(id=self.user_id))


class FakeSupabase:
    def __init__(self):
        self.table_responses = {}
        self.rpc_responses = {}
        self.queries = []
        self.executed = []
        self.storage = FakeStorage()
        self.auth = FakeAuth()
        # same private slots as supabase.AsyncClient, which fills them lazily
        self._postgrest = FakePostgrest()
        self._storage = self.storage

    def table(self, name):
        q = FakeQuery(self, "table", name)
        self.queries.append(q)
        return q

    def rpc(self, name, params=None):
        q = FakeQuery(self, "rpc", name, params)
        self.queries.append(q)
        return q

    @property
    def last(self):
        return self.queries[-1]

    @property
    def closed(self):
        return self._postgrest.session.closed and self._storage.session.closed


def response(data=None, count=None):
    return SimpleNamespace(data=data, count=count)


def api_error(message="boom", code="PGRST116"):
    from supabase import PostgrestAPIError
    return PostgrestAPIError({"message": message, "code": code, "hint": None, "details": None})


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def run():
    return asyncio.run
