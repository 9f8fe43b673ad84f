import pytest

from xfrpclient.proxy import (
    FtpPasv,
    Proxy,
    ProxyService,
    pasv_pack,
    pasv_unpack,
    rewrite_ftp_control,
)


def test_pasv_unpack_reads_address():
    pasv = pasv_unpack(b"227 Entering Passive Mode (192,168,1,2,4,5).\r\n")
    assert pasv.code == 227
    assert pasv.ftp_server_ip == "192.168.1.2"
    assert pasv.ftp_server_port == 4 * 256 + 5


def test_pasv_unpack_accepts_str():
    pasv = pasv_unpack("227 Entering Passive Mode (10,0,0,1,0,21).")
    assert pasv.ftp_server_ip == "10.0.0.1"
    assert pasv.ftp_server_port == 21


@pytest.mark.parametrize(
    "reply", [b"150 Opening data connection.\r\n", b"211 status\r\n", b"229 ext\r\n", b""]
)
def test_pasv_unpack_ignores_other_replies(reply):
    assert pasv_unpack(reply) is None


def test_pasv_pack_format():
    packed = pasv_pack(FtpPasv(code=227, ftp_server_ip="10.0.0.1", ftp_server_port=4 * 256 + 5))
    assert packed == b"227 Entering Passive Mode (10,0,0,1,4,5).\n"


def test_pasv_pack_rejects_other_codes():
    with pytest.raises(ValueError):
        pasv_pack(FtpPasv(code=229, ftp_server_ip="10.0.0.1", ftp_server_port=21))


def test_pack_unpack_round_trip():
    original = FtpPasv(code=227, ftp_server_ip="172.16.3.4", ftp_server_port=50021)
    assert pasv_unpack(pasv_pack(original)) == original


def test_rewrite_points_reply_at_server_and_sets_tunnel():
    service = ProxyService(proxy_name="ftp_data", proxy_type="tcp")
    proxy = Proxy(proxy_name="ftp", remote_data_port=6001, data_service=service)
    out = rewrite_ftp_control(
        b"227 Entering Passive Mode (192,168,1,2,4,5).\r\n", proxy, "203.0.113.9"
    )
    reply = pasv_unpack(out)
    assert reply.ftp_server_ip == "203.0.113.9"
    assert reply.ftp_server_port == 6001
    assert service.local_ip == "192.168.1.2"
    assert service.local_port == 4 * 256 + 5
    assert service.remote_port == 6001


def test_rewrite_without_data_service_still_rewrites():
    proxy = Proxy(proxy_name="ftp", remote_data_port=6001)
    out = rewrite_ftp_control(b"227 Entering Passive Mode (1,2,3,4,0,20).", proxy, "198.51.100.1")
    assert out == pasv_pack(FtpPasv(227, "198.51.100.1", 6001))


def test_rewrite_passes_other_data_through():
    proxy = Proxy(proxy_name="ftp", remote_data_port=6001)
    data = b"220 Welcome\r\n"
    assert rewrite_ftp_control(data, proxy, "198.51.100.1") == data


def test_rewrite_requires_remote_data_port():
    proxy = Proxy(proxy_name="ftp")
    with pytest.raises(ValueError):
        rewrite_ftp_control(b"227 Entering Passive Mode (1,2,3,4,0,20).", proxy, "198.51.100.1")


def test_rewrite_requires_server_ip():
    proxy = Proxy(proxy_name="ftp", remote_data_port=6001)
    with pytest.raises(ValueError):
        rewrite_ftp_control(b"227 Entering Passive Mode (1,2,3,4,0,20).", proxy, None)


def test_proxy_defaults():
    proxy = Proxy()
    assert proxy.remote_data_port == -1
    assert proxy.proxy_name is None


@pytest.mark.parametrize("kind, expected", [("ftp", True), ("tcp", False), ("http", False)])
def test_is_ftp(kind, expected):
    assert ProxyService(proxy_name="svc", proxy_type=kind).is_ftp() is expected