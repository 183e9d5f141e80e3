from unittest import TestCase, mock
from nftledger.db.driver import MongoDriver, LedgerDriver, get_driver


class TestMongoDriver(TestCase):
    def setUp(self):
        patcher = mock.patch('nftledger.db.driver.pymongo.MongoClient')
        self.client_cls = patcher.start()
        self.addCleanup(patcher.stop)

        self.collection = mock.MagicMock()
        self.client_cls.return_value.__getitem__.return_value.__getitem__.return_value = self.collection

        self.d = MongoDriver(conn_str='mongodb://db:27017', db='nft', collection='state')

    def test_connects_to_collection(self):
        self.client_cls.assert_called_once_with('mongodb://db:27017')
        self.client_cls.return_value.__getitem__.assert_called_once_with('nft')
        self.client_cls.return_value.__getitem__.return_value.__getitem__.assert_called_once_with('state')

    def test_get_decodes_value(self):
        self.collection.find_one.return_value = {'_id': 'erc721.token_owner:1', 'value': '"stu"'}

        self.assertEqual(self.d.get('erc721.token_owner:1'), 'stu')
        self.collection.find_one.assert_called_once_with({'_id': 'erc721.token_owner:1'})

    def test_get_missing(self):
        self.collection.find_one.return_value = None

        self.assertIsNone(self.d.get('nope'))

    def test_set_upserts_encoded_value(self):
        self.d.set('erc721.owned_tokens_count:stu', 3)

        self.collection.replace_one.assert_called_once_with(
            {'_id': 'erc721.owned_tokens_count:stu'},
            {'_id': 'erc721.owned_tokens_count:stu', 'value': '3'},
            upsert=True
        )

    def test_set_none_deletes(self):
        self.d.set('a', None)

        self.collection.delete_one.assert_called_once_with({'_id': 'a'})
        self.collection.replace_one.assert_not_called()

    def test_delete(self):
        self.d.delete('a')

        self.collection.delete_one.assert_called_once_with({'_id': 'a'})

    def test_iter_escapes_prefix_and_sorts(self):
        self.collection.find.return_value = [{'_id': 'erc721.x:2'}, {'_id': 'erc721.x:1'}]

        keys = self.d.iter('erc721.x:')

        self.assertListEqual(keys, ['erc721.x:1', 'erc721.x:2'])
        self.collection.find.assert_called_once_with({'_id': {'$regex': '^erc721\\.x:'}})

    def test_iter_length(self):
        self.collection.find.return_value = [{'_id': 'c'}, {'_id': 'a'}, {'_id': 'b'}]

        self.assertListEqual(self.d.iter('', length=2), ['a', 'b'])

    def test_flush(self):
        self.d.flush()

        self.collection.delete_many.assert_called_once_with({})

    def test_get_driver_builds_mongo(self):
        d = get_driver('mongo', conn_str='mongodb://other:27017')

        self.assertIsInstance(d, MongoDriver)

    def test_ledger_driver_commits_through_mongo(self):
        ld = LedgerDriver(driver=self.d)

        ld.set('erc721.token_owner:1', 'stu')
        ld.delete('erc721.token_approvals:1')
        ld.commit()

        self.collection.replace_one.assert_called_once_with(
            {'_id': 'erc721.token_owner:1'},
            {'_id': 'erc721.token_owner:1', 'value': '"stu"'},
            upsert=True
        )
        self.collection.delete_one.assert_called_once_with({'_id': 'erc721.token_approvals:1'})
