from unittest import TestCase, mock
import logging

from nftledger import logger


class TestLogger(TestCase):
    def test_get_logger_returns_named_logger(self):
        log = logger.get_logger('TEST_LOGGER')

        self.assertIsInstance(log, logging.Logger)
        self.assertEqual(log.name, 'TEST_LOGGER')
        self.assertEqual(log.level, logger._LOG_LVL)

    def test_only_standard_levels_accepted(self):
        self.assertListEqual(logger.VALID_LVLS, ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
        self.assertFalse(hasattr(logging.getLogger('TEST_LOGGER'), 'notice'))

    def test_negative_level_returns_mock_logger(self):
        with mock.patch.object(logger, '_LOG_LVL', -1):
            log = logger.get_logger('SILENT')

        self.assertIsInstance(log, logger.MockLogger)
        log.error('goes nowhere')

    def test_overwrite_logger_level(self):
        log = logger.get_logger('LEVELS')
        original = logger._LOG_LVL

        try:
            logger.overwrite_logger_level(logging.ERROR)
            self.assertEqual(log.level, logging.ERROR)
        finally:
            logger.overwrite_logger_level(original)
