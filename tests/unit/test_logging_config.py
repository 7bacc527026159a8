import logging

from confstore.logging_config import configure_logging


def test_level_from_yaml(tmp_path):
    cfg = tmp_path / 'log.yml'
    cfg.write_text('log_level: debug\n', encoding='utf-8')
    configure_logging(cfg)
    assert logging.getLogger().level == logging.DEBUG


def test_missing_file_defaults_to_warning(tmp_path):
    configure_logging(tmp_path / 'absent.yml')
    assert logging.getLogger().level == logging.WARNING


def test_invalid_yaml_falls_back(tmp_path):
    cfg = tmp_path / 'log.yml'
    cfg.write_text('log_level: [unclosed\n', encoding='utf-8')
    configure_logging(cfg)
    assert logging.getLogger().level == logging.WARNING


def test_unknown_level_name_ignored(tmp_path):
    cfg = tmp_path / 'log.yml'
    cfg.write_text('log_level: chatty\n', encoding='utf-8')
    configure_logging(cfg)
    assert logging.getLogger().level == logging.WARNING
