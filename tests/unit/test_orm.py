from unittest import TestCase
from nftledger.db.driver import LedgerDriver
from nftledger.db.orm import Datum, Hash

driver = LedgerDriver()


class TestDatum(TestCase):
    def setUp(self):
        driver.flush()

    def tearDown(self):
        driver.flush()

    def test_init(self):
        d = Datum('erc721', 'test', driver)
        self.assertEqual(d._key, driver.make_key('erc721', 'test'))


class TestHash(TestCase):
    def setUp(self):
        driver.flush()

    def tearDown(self):
        driver.flush()

    def test_setitem(self):
        h = Hash('erc721', 'token_owner', driver=driver)

        h[1] = 'stu'
        driver.commit()

        self.assertEqual(driver.get('erc721.token_owner:1'), 'stu')

    def test_getitem(self):
        driver.set('erc721.token_owner:1', 'stu')

        h = Hash('erc721', 'token_owner', driver=driver)

        self.assertEqual(h[1], 'stu')
        self.assertEqual(h['1'], 'stu')

    def test_getitem_missing_returns_default(self):
        h = Hash('erc721', 'owned_tokens_count', driver=driver, default_value=0)
        self.assertEqual(h['stu'], 0)

        h2 = Hash('erc721', 'token_owner', driver=driver)
        self.assertIsNone(h2[1])

    def test_multi_dimensional_key(self):
        h = Hash('erc721', 'operator_approvals', driver=driver)

        h['stu', 'colin'] = True

        self.assertIs(driver.get('erc721.operator_approvals:stu:colin'), True)
        self.assertIs(h['stu', 'colin'], True)
        self.assertIsNone(h['colin', 'stu'])

    def test_delitem(self):
        h = Hash('erc721', 'token_approvals', driver=driver)

        h[1] = 'colin'
        driver.commit()

        del h[1]

        self.assertIsNone(h[1])
        self.assertNotIn(1, h)

    def test_contains(self):
        h = Hash('erc721', 'owned_tokens_count', driver=driver, default_value=0)

        self.assertNotIn('stu', h)

        h['stu'] = 0

        # a stored zero is still an entry
        self.assertIn('stu', h)

    def test_all_and_items(self):
        h = Hash('erc721', 'token_owner', driver=driver)

        h[1] = 'stu'
        h[2] = 'colin'

        self.assertListEqual(sorted(h.all()), ['colin', 'stu'])
        self.assertDictEqual(h.items(), {'1': 'stu', '2': 'colin'})

    def test_all_with_partial_key(self):
        h = Hash('erc721', 'operator_approvals', driver=driver)

        h['stu', 'colin'] = True
        h['stu', 'raghu'] = False
        h['colin', 'stu'] = True

        self.assertDictEqual(h.items('stu'), {'colin': True, 'raghu': False})

    def test_clear(self):
        h = Hash('erc721', 'token_owner', driver=driver)

        h[1] = 'stu'
        h[2] = 'colin'
        h.clear()

        self.assertListEqual(h.all(), [])

    def test_illegal_delimiter_in_key(self):
        h = Hash('erc721', 'token_owner', driver=driver)

        with self.assertRaises(AssertionError):
            h['a:b'] = 'stu'

        with self.assertRaises(AssertionError):
            h['a.b'] = 'stu'

    def test_too_many_dimensions(self):
        h = Hash('erc721', 'operator_approvals', driver=driver)

        with self.assertRaises(AssertionError):
            h[tuple(str(i) for i in range(17))] = True

    def test_key_too_long(self):
        h = Hash('erc721', 'token_owner', driver=driver)

        with self.assertRaises(AssertionError):
            h['x' * 1025] = 'stu'
