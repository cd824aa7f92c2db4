from unittest import mock

import pytest

from phyphoxble.ninab31 import NinaB31


class FakeStream:
    def __init__(self, responses=None):
        self.responses = {k: list(v) for k, v in (responses or {}).items()}
        self.rx = bytearray()
        self.tx = bytearray()
        self._line = bytearray()

    @property
    def in_waiting(self):
        return len(self.rx)

    def read(self, size=1):
        chunk = bytes(self.rx[:size])
        del self.rx[:size]
        return chunk

    def write(self, data):
        self.tx += data
        for byte in data:
            if byte == ord("\r"):
                command = self._line.decode("latin-1")
                self._line.clear()
                replies = self.responses.get(command)
                if replies:
                    reply = replies.pop(0) if len(replies) > 1 else replies[0]
                    self.rx += reply
            else:
                self._line.append(byte)
        return len(data)

    def flush(self):
        pass

    def feed(self, text):
        self.rx += text.encode("latin-1")


def connected_module(responses=None):
    stream = FakeStream(responses)
    module = NinaB31(stream)
    stream.feed("+UUBTACLC:0,0,AABBCCDDEEFFr\r")
    for _ in range(40):
        module.poll()
    return module, stream


def test_check_response_ok_and_error():
    stream = FakeStream({"AT": [b"OK\r"], "AT+BAD": [b"ERROR\r"]})
    module = NinaB31(stream)
    assert module.check_response("AT", 100) is True
    assert module.check_response("AT+BAD", 100) is False
    assert stream.tx == b"AT\rAT+BAD\r"


def test_check_response_times_out():
    module = NinaB31(FakeStream())
    assert module.check_response("AT", 10) is False


def test_parse_response_reads_handle():
    stream = FakeStream(
        {
            "AT+UBTGSER=X": [b"\r\n+UBTGSER:5\r\nOK\r"],
            "AT+UBTGCHA=Y": [b"\r\n+UBTGCHA:7,8\r\nOK\r"],
            "AT": [b"OK\r"],
        }
    )
    module = NinaB31(stream)
    assert module.parse_response("AT+UBTGSER=X", 100) == 5
    assert module.parse_response("AT+UBTGCHA=Y", 100) == 7
    assert module.parse_response("AT", 100) is None


def test_set_local_name_sends_quoted_name():
    stream = FakeStream({'AT+UBTLN="box"': [b"OK\r"]})
    module = NinaB31(stream)
    assert module.set_local_name("box") is True
    assert stream.tx.endswith(b'AT+UBTLN="box"\r')


def test_set_local_name_too_long():
    with pytest.raises(ValueError):
        NinaB31(FakeStream()).set_local_name("n" * 30)


def test_advertise_commands():
    stream = FakeStream({"AT+UBTDM=3": [b"OK\r"], "AT+UBTDM=1": [b"OK\r"]})
    module = NinaB31(stream)
    assert module.advertise() and module.stop_advertise()
    assert stream.tx == b"AT+UBTDM=3\rAT+UBTDM=1\r"


def test_set_connection_interval():
    stream = FakeStream({"AT+UBTLECFG=1,32": [b"OK\r"], "AT+UBTLECFG=2,64": [b"OK\r"]})
    module = NinaB31(stream)
    assert module.set_connection_interval(32, 64) is True
    assert stream.tx == b"AT+UBTLECFG=1,32\rAT+UBTLECFG=2,64\r"


@pytest.mark.parametrize("low, high", [(31, 64), (32, 16385), (64, 32)])
def test_set_connection_interval_invalid(low, high):
    with pytest.raises(ValueError):
        NinaB31(FakeStream()).set_connection_interval(low, high)


def test_write_bytes_needs_connection():
    stream = FakeStream()
    module = NinaB31(stream)
    assert module.write_bytes(3, b"\x0a\xff") is False
    assert stream.tx == b""


def test_connection_events_toggle_state():
    module, stream = connected_module()
    assert module.connected is True
    stream.feed("+UUBTACLD:0\r")
    for _ in range(20):
        assert module.poll() is False
    assert module.connected is False


def test_write_bytes_hex_encodes():
    module, stream = connected_module({"AT+UBTGSN=0,3,0aff": [b"OK\r"]})
    assert module.write_bytes(3, b"\x0a\xff") is True
    assert stream.tx.endswith(b"AT+UBTGSN=0,3,0aff\r")


def test_write_bytes_too_long():
    module, _ = connected_module()
    with pytest.raises(ValueError):
        module.write_bytes(3, bytes(21))


def test_write_value_sends_text():
    module, stream = connected_module({"AT+UBTGSN=0,4,abcd": [b"OK\r"]})
    assert module.write_value(4, "abcd") is True
    with pytest.raises(ValueError):
        module.write_value(4, "a" * 41)


def test_check_char_written():
    stream = FakeStream()
    module = NinaB31(stream)
    stream.feed("+UUBTGRW:0,12,0011,0\r")
    results = [module.poll() for _ in range(len("+UUBTGRW:0,12,0011,0\r"))]
    assert results[-1] is True
    assert module.check_char_written(12) == "0011"
    assert module.check_char_written(13) is None
    module.flush_input()
    assert module.check_char_written(12) is None


@mock.patch("phyphoxble.ninab31.time.sleep")
def test_begin_when_module_answers(_sleep):
    stream = FakeStream({"AT": [b"OK\r"], "ATE0": [b"OK\r"]})
    assert NinaB31(stream).begin() is True
    assert b"AT+UMRS" not in stream.tx


@mock.patch("phyphoxble.ninab31.time.sleep")
def test_begin_reconfigures_module(_sleep):
    stream = FakeStream({"AT": [b"OK\r"], "ATE0": [b"ERROR\r", b"OK\r"]})
    assert NinaB31(stream).begin() is True
    assert b"AT+UMRS=115200,2,8,1,1\rAT&W0\rAT+CPWROFF\r" in stream.tx