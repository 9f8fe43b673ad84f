import platform
import re

import pytest

from xfrpclient.login import PROTOCOL_VERSION, Login, LoginResponse, new_login


def test_new_login_defaults():
    login = new_login("alice")
    assert login.version == PROTOCOL_VERSION == "0.10.0"
    assert login.user == "alice"
    assert login.hostname is None
    assert login.privilege_key is None
    assert login.timestamp == 0
    assert login.pool_count == 1
    assert login.logged is False


def test_new_login_host_details():
    login = new_login(None)
    info = platform.uname()
    assert login.os == info.system
    assert login.arch == info.machine
    assert re.fullmatch(r"[0-9A-F]{12}", login.run_id)


def test_check_response_success_replaces_run_id():
    login = Login(run_id="AABBCCDDEEFF")
    ok = login.check_response(LoginResponse(version="0.10.0", run_id="server-id", error=""))
    assert ok is True
    assert login.logged is True
    assert login.run_id == "server-id"


@pytest.mark.parametrize("run_id", [None, "", "x"])
def test_check_response_failure(run_id):
    login = Login(run_id="AABBCCDDEEFF", logged=True)
    ok = login.check_response(LoginResponse(run_id=run_id, error="denied"))
    assert ok is False
    assert login.logged is False
    assert login.run_id == "AABBCCDDEEFF"


def test_failure_after_success_clears_logged():
    login = Login()
    assert login.check_response(LoginResponse(run_id="abc")) is True
    assert login.check_response(LoginResponse(run_id=None)) is False
    assert login.run_id == "abc"