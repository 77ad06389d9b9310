from logger import Logger, VerboseLog


class FakeLogger:
    def __init__(self):
        self.messages = []

    def info(self, msg):
        self.messages.append(msg)


def test_verbose_log_enabled():
    fake = FakeLogger()
    log = VerboseLog(fake, enabled=True)
    log.log_line("one")
    log.log_lines(["two", "three"])
    assert fake.messages == ["one", "two", "three"]


def test_verbose_log_disabled():
    fake = FakeLogger()
    log = VerboseLog(fake, enabled=False)
    log.log_line("one")
    log.log_lines(["two"])
    assert fake.messages == []


def test_get_logger_is_cached_and_writes_file(tmp_path):
    path = tmp_path / "logs" / "chash.log"
    logger = Logger.get_logger("test-file-logger", log_file=str(path))
    assert Logger.get_logger("test-file-logger") is logger

    logger.info("ring built")
    for h in logger.handlers:
        h.flush()
    assert "ring built" in path.read_text()


def test_cached_logger_picks_up_later_log_file(tmp_path):
    logger = Logger.get_logger("test-late-file-logger")
    path = tmp_path / "late.log"
    assert Logger.get_logger("test-late-file-logger", log_file=str(path)) is logger
    # asking again for the same file does not add a second handler
    Logger.get_logger("test-late-file-logger", log_file=str(path))

    logger.info("points generated")
    for h in logger.handlers:
        h.flush()
    assert path.read_text().count("points generated") == 1


def test_plain_logger_prints_bare_lines_on_stdout(capsys):
    log = VerboseLog(Logger.get_logger("test-plain-logger", plain=True), enabled=True)
    log.log_line("hash: 1")
    log.log_lines(["hash: 2"])
    captured = capsys.readouterr()
    assert captured.out == "hash: 1\nhash: 2\n"
    assert captured.err == ""
