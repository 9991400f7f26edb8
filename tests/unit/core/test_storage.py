"""
Unit Tests for storage helpers
"""
import re

import pytest

from app import storage
from app.exceptions import PortalValidationError, StorageError
from mocks.mock_supabase import MockSupabaseClient


class TestStorageKey:
    def test_key_format(self):
        key = storage.generate_storage_key('Thermo Notes.PDF', now_ms=1700000000000)
        assert re.fullmatch(r'1700000000000_[a-z0-9]{6}\.pdf', key)

    def test_keys_are_unique(self):
        keys = {storage.generate_storage_key('a.pdf', now_ms=1) for _ in range(50)}
        assert len(keys) == 50

    def test_key_without_extension(self):
        assert re.fullmatch(r'5_[a-z0-9]{6}', storage.generate_storage_key('README', now_ms=5))


class TestExtensions:
    @pytest.mark.parametrize('name', ['a.pdf', 'b.ZIP', 'c.doc', 'd.docx'])
    def test_allowed(self, name):
        storage.check_extension(name)

    @pytest.mark.parametrize('name', ['a.exe', 'noext', ''])
    def test_rejected(self, name):
        with pytest.raises(PortalValidationError):
            storage.check_extension(name)


class TestStoragePath:
    def test_path_after_bucket_segment(self):
        url = 'https://p.supabase.co/storage/v1/object/public/eng-docs/1700_abc123.pdf'
        assert storage.storage_path_from_url(url) == '1700_abc123.pdf'

    def test_foreign_url_has_no_path(self):
        assert storage.storage_path_from_url('https://example.com/file.pdf') is None
        assert storage.storage_path_from_url('') is None


class TestUploadAndRemove:
    def test_upload_returns_public_url(self):
        client = MockSupabaseClient()
        url = storage.upload_file(client, 'k.pdf', b'data', 'application/pdf')
        assert url.endswith('/eng-docs/k.pdf')
        assert client.bucket().files['k.pdf'] == b'data'

    def test_upload_failure_raises_storage_error(self):
        client = MockSupabaseClient()
        client.storage.fail_uploads = True
        with pytest.raises(StorageError):
            storage.upload_file(client, 'k.pdf', b'data')

    def test_remove_failure_raises_storage_error(self):
        client = MockSupabaseClient()
        client.storage.fail_removals = True
        with pytest.raises(StorageError):
            storage.remove_file(client, 'k.pdf')
