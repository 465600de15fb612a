"""
Unit tests for LocalStorageClient

Test Coverage:
1. In-memory and file-backed get/set/remove
2. Corrupt state file handling
3. Writes leave no temp files behind
"""

import orjson
import pytest

from eventora.platform.exception.exceptions import LocalStorageError
from eventora.platform.state.local_storage_client import LocalStorageClient


pytestmark = pytest.mark.unit


class TestInMemory:
    def test_round_trip(self, memory_storage):
        memory_storage.set_item('token', 'jwt')

        assert memory_storage.get_item('token') == 'jwt'
        assert memory_storage.keys() == ['token']

    def test_missing_key_is_none(self, memory_storage):
        assert memory_storage.get_item('nope') is None

    def test_remove(self, memory_storage):
        memory_storage.set_item('token', 'jwt')

        memory_storage.remove_item('token')
        memory_storage.remove_item('token')

        assert memory_storage.get_item('token') is None


class TestFileBacked:
    def test_values_survive_a_new_client(self, tmp_path):
        path = tmp_path / 'state' / 'local_storage.json'
        LocalStorageClient(path).set_item('token', 'jwt')

        assert LocalStorageClient(path).get_item('token') == 'jwt'
        assert orjson.loads(path.read_bytes()) == {'token': 'jwt'}

    def test_no_temp_files_left_behind(self, tmp_path):
        path = tmp_path / 'local_storage.json'
        storage = LocalStorageClient(path)

        for i in range(5):
            storage.set_item(f'k{i}', str(i))

        assert [p.name for p in tmp_path.iterdir()] == ['local_storage.json']

    def test_corrupt_file_raises_on_read(self, tmp_path):
        path = tmp_path / 'local_storage.json'
        path.write_text('{oops')

        with pytest.raises(LocalStorageError):
            LocalStorageClient(path).get_item('token')

    def test_non_object_file_raises_on_read(self, tmp_path):
        path = tmp_path / 'local_storage.json'
        path.write_text('[1, 2]')

        with pytest.raises(LocalStorageError):
            LocalStorageClient(path).keys()

    def test_write_over_corrupt_file_starts_fresh(self, tmp_path):
        path = tmp_path / 'local_storage.json'
        path.write_text('{oops')
        storage = LocalStorageClient(path)

        storage.set_item('token', 'jwt')

        assert storage.keys() == ['token']

    def test_non_string_values_are_ignored(self, tmp_path):
        path = tmp_path / 'local_storage.json'
        path.write_text('{"token": "jwt", "count": 3}')

        assert LocalStorageClient(path).keys() == ['token']
