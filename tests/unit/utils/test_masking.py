from unittest.mock import MagicMock

from markpress.utils.logging import log_config_param, mask_sensitive


def test_mask_sensitive_keeps_edges():
    assert mask_sensitive("abcd1234efgh") == "abcd****efgh"


def test_mask_sensitive_short_value():
    assert mask_sensitive("secret") == "******"


def test_mask_sensitive_empty():
    assert mask_sensitive(None) == "Not Provided"
    assert mask_sensitive("") == "Not Provided"


def test_log_config_param_masks_sensitive_values():
    logger = MagicMock()

    log_config_param(logger, "WordPress", "Password", "abcd efgh ijkl", sensitive=True)

    logger.info.assert_called_once_with("WordPress Password: abcd******ijkl")


def test_log_config_param_plain_value():
    logger = MagicMock()

    log_config_param(logger, "WordPress", "URL", None)

    logger.info.assert_called_once_with("WordPress URL: Not Provided")
