"""Tests for create_index_safe conflict handling."""

import unittest
from unittest.mock import MagicMock

from pymongo.errors import OperationFailure

from adapter.mongodb.indexes import create_index_safe, ensure_all_indexes


class TestCreateIndexSafe(unittest.TestCase):

    def test_creates_index(self):
        collection = MagicMock()

        self.assertTrue(create_index_safe(collection, [('username', 1)], 'idx_users_username', unique=True))
        collection.create_index.assert_called_once_with([('username', 1)], name='idx_users_username', unique=True)

    def test_replaces_same_keys_under_old_name(self):
        collection = MagicMock()
        collection.create_index.side_effect = [OperationFailure("Index already exists with a different name"), None]
        collection.index_information.return_value = {
            '_id_': {'key': [('_id', 1)]},
            'username_1': {'key': [('username', 1)]},
        }

        self.assertTrue(create_index_safe(collection, [('username', 1)], 'idx_users_username'))
        collection.drop_index.assert_called_once_with('username_1')

    def test_unrelated_error_propagates(self):
        collection = MagicMock()
        collection.create_index.side_effect = OperationFailure("not authorized")

        with self.assertRaises(OperationFailure):
            create_index_safe(collection, [('email', 1)], 'idx_users_email')


class TestEnsureAllIndexes(unittest.TestCase):

    def test_creates_account_and_game_indexes(self):
        collection = MagicMock()
        db = MagicMock()
        db.__getitem__.return_value = collection

        self.assertTrue(ensure_all_indexes(db))

        names = {c.kwargs['name'] for c in collection.create_index.call_args_list}
        self.assertIn('idx_users_username', names)
        self.assertIn('idx_users_email', names)
        self.assertIn('idx_games_match_time', names)


if __name__ == '__main__':
    unittest.main()
