# xfrpclient

Pure-Python building blocks for a lightweight reverse-proxy client that speaks
control protocol version 0.10.0 (`xfrpclient.login.PROTOCOL_VERSION`). It uses
only the standard library.

## What is inside

- `xfrpclient.msg` – control message types (`MsgType`), `pack` / `unpack` of
  the wire format (one type byte, a 4-byte big-endian length, the body), and
  JSON bodies: `login_request_marshal`, `new_proxy_service_marshal`,
  `new_work_conn_marshal`, `login_resp_unmarshal`,
  `start_work_conn_resp_unmarshal`, `control_response_unmarshal`. Also
  `calc_md5`, `get_auth_key` and `msg_type_valid_check`. `unpack` raises
  `ValueError` for an unknown type or a truncated buffer.
- `xfrpclient.frame` – the 8-byte stream-multiplexing frame header:
  `Frame.from_bytes`, `Frame.from_message`, the `Command` enum
  (`SYN`, `FIN`, `PSH`, `NOP`) and `header_size()`.
- `xfrpclient.session` – `SessionIdAllocator`, with `current()` and `next()`.
  A client allocator hands out odd ids starting from 3; one made with
  `client=False` hands out even ids starting from 2.
- `xfrpclient.login` – login state (`Login`, `LoginResponse`).
  `new_login(user)` fills in the operating system, machine type and, as run
  id, the MAC address of this host (read from `/sys/class/net`, preferring a
  `br-lan` bridge, with `uuid.getnode()` as a fallback).
  `Login.check_response` records whether a login reply succeeded and takes
  over the server's run id.
- `xfrpclient.proxy` – `ProxyService`, `Proxy` and `FtpPasv`, and rewriting of
  FTP `227 Entering Passive Mode` replies: `pasv_unpack`, `pasv_pack` and
  `rewrite_ftp_control`, which points the reply at the server address and the
  proxy's remote data port and updates the linked data service.
- `xfrpclient.ini` – a small INI parser with `[section]` headers, `=` or `:`
  pairs, `;` / `#` comment lines, inline `;` comments and indented
  continuation lines (`parse`, `parse_file`, `parse_string`, `parse_lines`).
  A handler that returns `False` rejects a pair; the first bad line is
  reported through `IniParseError.lineno` after the whole input is read.
- `xfrpclient.compression` – `deflate_write` and `inflate_read`. Without
  `gzip` both use zlib streams. With `gzip=True`, `deflate_write` produces a
  gzip stream while `inflate_read` reads a raw deflate stream, so the two are
  not inverses in that mode. Failures raise `CompressionError`.
- `xfrpclient.pbkdf2` – `pbkdf2_hmac_sha1`, `pbkdf2_hmac_sha256` and
  `pbkdf2_hmac_sha512`.
- `xfrpclient.netutils` – `is_valid_ip_address` (IPv4 only), `dns_unified`
  (lower-cases a domain and drops everything from the first `/`, raising
  `ValueError` if there is no dot) and `s_sleep`.

## What it does not do

The package has no command to run and opens no connections: there is no
control loop, no login exchange with a server, no forwarding of TCP traffic
and no reading of a client configuration into settings. It provides the
pieces such a client is built from.

## Installing

```
pip install .
```

## Examples

Pack a control message and read it back:

```python
from xfrpclient.msg import Message, MsgType, pack, unpack

wire = pack(Message(MsgType.PING, b""))
assert unpack(wire).type == MsgType.PING
```

Read INI data section by section:

```python
from xfrpclient.ini import parse_string

settings = {}

def handler(section, name, value):
    settings.setdefault(section, {})[name] = value
    return True

parse_string("[common]\nserver_addr = 10.0.0.1\nserver_port = 7000\n", handler)
```

Rewrite an FTP passive-mode reply:

```python
from xfrpclient.proxy import Proxy, rewrite_ftp_control

proxy = Proxy(proxy_name="ftp", remote_data_port=6001)
reply = rewrite_ftp_control(
    b"227 Entering Passive Mode (192,168,1,2,19,137).\n", proxy, "10.0.0.1"
)
# b"227 Entering Passive Mode (10,0,0,1,23,113).\n"
```

Derive a key:

```python
from xfrpclient.pbkdf2 import pbkdf2_hmac_sha256

key = pbkdf2_hmac_sha256(b"password", b"salt", 4096, 32)
```

## Running the tests

```
pip install .[test]
pytest
```