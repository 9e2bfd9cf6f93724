"""Tests for bitrate presets, protocol parameters, and status tables."""

import pytest

from rcs380_mcp.exceptions import ParameterError
from rcs380_mcp.models.bitrate import BITRATE_PROFILES, rf_settings
from rcs380_mcp.models.protocol_params import ProtocolParameters
from rcs380_mcp.models.sensf import SensfResponse
from rcs380_mcp.status import CommunicationStatus, StatusCode, decompose_status, status_name

IDM = bytes.fromhex("0123456789abcdef")
PMM = bytes.fromhex("0102030405060708")


def test_bitrate_profiles():
    assert set(BITRATE_PROFILES) == {
        "212F", "424F", "106A", "212A", "424A", "106B", "212B", "424B",
    }
    assert all(len(v) == 4 for v in BITRATE_PROFILES.values())


def test_rf_settings_same_profile():
    assert rf_settings("212F") == bytes([1, 1, 15, 1])


def test_rf_settings_mixed_profiles():
    """Send side contributes the first two bytes, receive side the last two."""
    assert rf_settings("212F", "424F") == bytes([1, 1, 15, 2])
    assert rf_settings("106A", "424B") == bytes([2, 3, 15, 9])


def test_rf_settings_unknown():
    with pytest.raises(ParameterError):
        rf_settings("999X")
    with pytest.raises(ParameterError):
        rf_settings("212F", "999X")


def test_parameter_error_is_value_error():
    with pytest.raises(ValueError):
        rf_settings("bogus")


def test_protocol_params_empty():
    assert ProtocolParameters().to_bytes() == b""


def test_protocol_params_ascending_keys():
    params = ProtocolParameters(guard_time=6, initial_guard_time=24, deaf_time=4)
    assert params.to_bytes() == bytes([0x00, 24, 0x0E, 4, 0x13, 6])


def test_protocol_params_default():
    data = ProtocolParameters.default().to_bytes()
    assert len(data) == 19 * 2
    keys = data[0::2]
    assert list(keys) == sorted(keys)
    assert 0x0D not in keys
    assert data[:2] == bytes([0x00, 24])
    assert data[-2:] == bytes([0x13, 6])


def test_protocol_params_with_values():
    default = ProtocolParameters.default()
    params = default.with_values(initial_guard_time=28)
    assert params.initial_guard_time == 28
    assert default.initial_guard_time == 24
    assert params.to_bytes()[:2] == bytes([0x00, 28])
    assert params.to_bytes()[2:] == default.to_bytes()[2:]


def test_protocol_params_out_of_range():
    with pytest.raises(ParameterError):
        ProtocolParameters(add_crc=256).to_bytes()
    with pytest.raises(ParameterError):
        ProtocolParameters(add_crc=-1).to_bytes()


def test_protocol_params_unknown_field():
    with pytest.raises(TypeError):
        ProtocolParameters.default().with_values(bogus=1)


def test_protocol_params_to_dict():
    assert ProtocolParameters(rfca=1).to_dict() == {"rfca": 1}


def test_status_names():
    assert status_name(0) == "SUCCESS"
    assert status_name(StatusCode.COMMAND_TYPE_ERROR) == "COMMAND_TYPE_ERROR"
    assert status_name(0x42) == "UNKNOWN STATUS ERROR 0x42"


def test_decompose_status():
    assert decompose_status(0) == []
    assert decompose_status(0x80) == ["RECEIVE_TIMEOUT_ERROR"]
    assert decompose_status(0x80000004) == ["CRC_ERROR", "RECEIVE_LENGTH_ERROR"]


def test_decompose_status_unnamed_bits():
    assert decompose_status(0x00000020) == ["0x00000020"]
    assert decompose_status(0x00001001) == ["PROTOCOL_ERROR", "0x00001000"]


def test_receive_timeout_flag():
    assert CommunicationStatus.RECEIVE_TIMEOUT_ERROR == 0x80
    assert CommunicationStatus.RECEIVE_LENGTH_ERROR == 0x80000000


def test_sensf_response_from_bytes():
    card = SensfResponse.from_bytes(b"\x01" + IDM + PMM)
    assert card.response_code == 0x01
    assert card.idm == IDM
    assert card.pmm == PMM
    assert card.system_code is None


def test_sensf_response_system_code():
    card = SensfResponse.from_bytes(b"\x01" + IDM + PMM + b"\x00\x03")
    assert card.system_code == b"\x00\x03"
    assert card.to_dict() == {
        "idm": "0123456789ABCDEF",
        "pmm": "0102030405060708",
        "system_code": "0003",
    }


def test_sensf_response_invalid():
    with pytest.raises(ValueError):
        SensfResponse.from_bytes(b"\x01" + IDM)
    with pytest.raises(ValueError):
        SensfResponse.from_bytes(b"\x02" + IDM + PMM)
