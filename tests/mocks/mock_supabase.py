"""
Mock Supabase client for testing.

Covers the parts of the client the portal calls: ``auth`` (sign up, sign in,
get user, password reset) and ``storage.from_(bucket)`` (upload, public
URL, remove). Every call is recorded so tests can assert on it.
"""
import uuid
from types import SimpleNamespace
from typing import Dict, List, Optional, Tuple


class MockAuthError(Exception):
    pass


class MockAuth:
    def __init__(self):
        self.accounts: Dict[str, Tuple[str, SimpleNamespace]] = {}
        self.tokens: Dict[str, SimpleNamespace] = {}
        self.reset_requests: List[Tuple[str, dict]] = []
        self.get_user_calls = 0
        self.require_email_confirmation = False

    def add_user(self, email: str, password: str = "password123", user_id: Optional[str] = None):
        """Register an account directly and return (user, access token)."""
        user = SimpleNamespace(id=user_id or str(uuid.uuid4()), email=email)
        self.accounts[email] = (password, user)
        token = f"token-{user.id}"
        self.tokens[token] = user
        return user, token

    def _session_for(self, user):
        token = f"token-{user.id}"
        self.tokens[token] = user
        return SimpleNamespace(access_token=token)

    def sign_up(self, credentials: dict):
        email = credentials["email"]
        if email in self.accounts:
            raise MockAuthError("User already registered")
        user = SimpleNamespace(id=str(uuid.uuid4()), email=email)
        self.accounts[email] = (credentials["password"], user)
        session = None if self.require_email_confirmation else self._session_for(user)
        return SimpleNamespace(user=user, session=session)

    def sign_in_with_password(self, credentials: dict):
        account = self.accounts.get(credentials["email"])
        if account is None or account[0] != credentials["password"]:
            raise MockAuthError("Invalid login credentials")
        user = account[1]
        return SimpleNamespace(user=user, session=self._session_for(user))

    def get_user(self, jwt: str):
        self.get_user_calls += 1
        user = self.tokens.get(jwt)
        if user is None:
            raise MockAuthError("invalid JWT")
        return SimpleNamespace(user=user)

    def reset_password_for_email(self, email: str, options: dict = None):
        self.reset_requests.append((email, options or {}))


class MockBucket:
    def __init__(self, name: str, storage: "MockStorage"):
        self.name = name
        self._storage = storage
        self.files: Dict[str, bytes] = {}
        self.uploads: List[str] = []
        self.removals: List[List[str]] = []

    def upload(self, path: str, file: bytes, file_options: dict = None):
        if self._storage.fail_uploads:
            raise MockAuthError("Bucket not found")
        self.uploads.append(path)
        self.files[path] = file
        return SimpleNamespace(path=path)

    def get_public_url(self, path: str) -> str:
        return f"https://project.supabase.co/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths: List[str]):
        self.removals.append(list(paths))
        if self._storage.fail_removals:
            raise MockAuthError("Object not found")
        for path in paths:
            self.files.pop(path, None)
        return []


class MockStorage:
    def __init__(self):
        self.buckets: Dict[str, MockBucket] = {}
        self.fail_uploads = False
        self.fail_removals = False

    def from_(self, name: str) -> MockBucket:
        if name not in self.buckets:
            self.buckets[name] = MockBucket(name, self)
        return self.buckets[name]


class MockSupabaseClient:
    def __init__(self):
        self.auth = MockAuth()
        self.storage = MockStorage()

    def bucket(self, name: str = "eng-docs") -> MockBucket:
        return self.storage.from_(name)
