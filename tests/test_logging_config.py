from unittest.mock import patch

from api_blueprint import logging_config


class TestSetupLogging:
    @patch("api_blueprint.logging_config.logger")
    def test_replaces_default_sink(self, mock_logger):
        logging_config.setup_logging("DEBUG", force=True)

        mock_logger.remove.assert_called_once_with()
        assert mock_logger.add.call_args.kwargs["level"] == "DEBUG"

    @patch("api_blueprint.logging_config.logger")
    def test_only_first_call_applies(self, mock_logger):
        logging_config.setup_logging("INFO", force=True)
        logging_config.setup_logging("DEBUG")

        mock_logger.add.assert_called_once()
