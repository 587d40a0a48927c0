"""
Tests of oeformat.io
"""

from pathlib import Path
from tempfile import TemporaryDirectory

import numpy as np
import pytest

import oeformat
from oeformat.core import HeaderFormatError, UnsupportedFormatError
from oeformat.io import decode, decode_folder, get_decoder, get_number_of_records
from oeformat.rawio import ContinuousDecoder, EventDecoder, SpikeDecoder, get_decoder_class
from oeformat.rawio.continuousrawio import CONTINUOUS_RECORD_SIZE
from oeformat.rawio.tests.tools import continuous_record, event_record, make_header, spike_record, write_file
from oeformat.units import continuous_to_quantity, spikes_to_quantity


def block(value):
    return np.full(1024, value, dtype="int16")


def test_get_decoder_class():
    assert get_decoder_class("100_CH1.continuous") is ContinuousDecoder
    assert get_decoder_class("STp106.0n0.spikes") is SpikeDecoder
    assert get_decoder_class(Path("folder") / "all_channels.EVENTS") is EventDecoder


def test_unsupported_extension_does_not_open_file():
    non_existant_file = Path("non_existant_folder/non_existant_file.fake")
    with pytest.raises(UnsupportedFormatError):
        decode(non_existant_file)
    with pytest.raises(ValueError):
        get_decoder("settings.xml")


def test_get_decoder_kwargs():
    decoder = get_decoder("100_CH1.continuous", block_length=16, with_recording_number=True)
    assert isinstance(decoder, ContinuousDecoder)
    assert decoder.block_length == 16
    assert decoder.with_recording_number


def test_decode_dispatch():
    with TemporaryDirectory(prefix="oeformat_decode_") as dirname:
        dirname = Path(dirname)
        cont = write_file(dirname / "100_CH1.continuous", [continuous_record(i * 1024, block(i)) for i in range(2)])
        waveform = np.full((64, 4), 32768, dtype="uint16")
        spk = write_file(dirname / "STp106.0n0.spikes", [spike_record(7, 1, waveform, [1000] * 4)])
        evt = write_file(dirname / "all_channels.events", [event_record(5, 0, 3, 100, 1, 2)])

        data, timestamps, info = oeformat.decode(cont)
        assert data.size == 2048
        assert timestamps.mask[-1]

        data, timestamps, info = oeformat.decode(str(spk))
        assert data.shape == (1, 64, 4)
        assert list(timestamps) == [7]

        data, timestamps, info = oeformat.decode(evt)
        assert list(data) == [2]
        assert list(timestamps) == [5]


def test_decode_folder_order():
    with TemporaryDirectory(prefix="oeformat_folder_") as dirname:
        dirname = Path(dirname)
        for name, value in [("100_CH10", 10), ("100_ADC1", -1), ("100_CH2", 2), ("100_CH1", 1)]:
            write_file(dirname / f"{name}.continuous", [continuous_record(0, block(value))])
        write_file(dirname / "all_channels.events", [event_record(5, 0, 3, 100, 1, 2)])

        results = decode_folder(dirname)
        assert list(results.keys()) == ["100_CH1", "100_CH2", "100_CH10", "100_ADC1"]
        data, timestamps, info = results["100_CH10"]
        assert np.all(data == 10)

        results = decode_folder(dirname, channels=["100_CH2"])
        assert list(results.keys()) == ["100_CH2"]


def test_get_number_of_records():
    with TemporaryDirectory(prefix="oeformat_nrecords_") as dirname:
        filename = Path(dirname) / "100_CH1.continuous"
        records = [continuous_record(i * 1024, block(i)) for i in range(3)]
        write_file(filename, records + [records[0][: CONTINUOUS_RECORD_SIZE // 2]])
        assert get_number_of_records(filename) == 3

        filename = Path(dirname) / "100_CH2.continuous"
        write_file(filename, [continuous_record(0, np.zeros(16, dtype="int16"))], header=make_header(blockLength=16))
        assert get_number_of_records(filename) == 1


def test_get_number_of_records_invalid_block_length(caplog):
    with TemporaryDirectory(prefix="oeformat_nrecords_") as dirname:
        filename = Path(dirname) / "100_CH1.continuous"
        records = [continuous_record(i * 1024, block(i)) for i in range(2)]
        write_file(filename, records, header=make_header(blockLength="abc"))
        with caplog.at_level("WARNING", logger="oeformat"):
            assert get_number_of_records(filename) == 2
        assert "blockLength" in caplog.text


def test_units():
    header = {"bitVolts": 0.5}
    sig = continuous_to_quantity(np.array([2, -4], dtype="int16"), header)
    assert str(sig.dimensionality) == "uV"
    np.testing.assert_allclose(sig.magnitude, [1.0, -2.0])
    np.testing.assert_allclose(continuous_to_quantity([2000], header, units="mV").magnitude, [1.0])

    with pytest.raises(KeyError):
        continuous_to_quantity([1], {})

    wf = spikes_to_quantity(np.zeros((1, 2, 3)))
    assert wf.shape == (1, 2, 3)
    assert str(wf.dimensionality) == "uV"


def test_bad_header_is_fatal():
    with TemporaryDirectory(prefix="oeformat_badheader_") as dirname:
        filename = Path(dirname) / "100_CH1.continuous"
        raw = b"header.version = 0.4; exec('boom');"
        filename.write_bytes(raw + b" " * (1024 - len(raw)) + continuous_record(0, block(0)))
        with pytest.raises(HeaderFormatError):
            decode(filename)
