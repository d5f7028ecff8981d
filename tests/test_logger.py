import pytest

from windengine.logger import ConsoleStream, Logger, LoggerStream


class ListStream(LoggerStream):
    def __init__(self):
        self.lines = []

    def log(self, text):
        self.lines.append(text)


def test_text_formats_arguments():
    stream = ListStream()
    Logger(stream).text("a {} b {}", 1, "x")
    assert stream.lines == ["a 1 b x"]


def test_error_and_info_prefixes():
    stream = ListStream()
    logger = Logger(stream)
    logger.error("bad {}", 2)
    logger.info("ok")
    assert stream.lines == ["[ERROR] bad 2", "[INFO] ok"]


def test_escaped_braces():
    stream = ListStream()
    Logger(stream).text("{{}} {}", 3)
    assert stream.lines == ["{} 3"]


def test_missing_argument_raises():
    with pytest.raises(IndexError):
        Logger(ListStream()).text("{} {}", 1)


def test_console_stream_prints(capsys):
    ConsoleStream().log("hello")
    assert capsys.readouterr().out == "hello\n"


def test_default_stream_is_console(capsys):
    Logger().info("value {}", 5)
    assert capsys.readouterr().out == "[INFO] value 5\n"