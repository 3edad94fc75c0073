from __future__ import annotations

"""
Simple TCP REPL server for pexpr.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(plus 1 2)"}
- Response: {"ok": true, "result": "3"} or {"ok": false, "error": <message>, "type": <error class>}
- Request: {"cmd": "reset"} forgets every constant defined so far.

One Interpreter is shared by all clients so that def bindings persist across
evaluations; evaluations are serialized with a lock.
"""

import json
import logging
import socket
import threading
from typing import Any, Dict, Tuple

from pexpr import config
from pexpr.debug_utils.pprint import format_value
from pexpr.errors import PexprError
from pexpr.interpreter import Interpreter

logger = logging.getLogger(__name__)


class ReplServer:
    def __init__(self, host: str | None = None, port: int | None = None):
        default_host, default_port = config.get_repl_address()
        self.host = default_host if host is None else host
        self.port = default_port if port is None else port
        self.interp = Interpreter(persist_env=config.get_persist_env())
        self._lock = threading.Lock()

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("pexpr REPL server listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def handle_request(self, line: bytes) -> Dict[str, Any]:
        """Decode one request line and produce its response object."""
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        if not isinstance(req, dict):
            return {"ok": False, "error": "Invalid request: expected a JSON object"}

        cmd = req.get("cmd")
        if cmd == "eval":
            code = req.get("code", "")
            if not isinstance(code, str):
                return {"ok": False, "error": "Invalid request: code must be a string"}
            try:
                with self._lock:
                    result = self.interp.eval(code)
            except PexprError as ex:
                return {"ok": False, "error": ex.message, "type": type(ex).__name__}
            return {"ok": True, "result": format_value(result)}
        if cmd == "reset":
            with self._lock:
                self.interp.reset()
            return {"ok": True, "result": None}
        return {"ok": False, "error": f"Unknown cmd: {cmd}"}

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.info("client connected: %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = self.handle_request(line)
                    if not resp["ok"]:
                        logger.debug("request from %s:%d failed: %s", addr[0], addr[1], resp["error"])
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        logger.info("client disconnected: %s:%d", *addr)


def main() -> None:
    config.configure_logging()
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
