"""Configuration constants for the custom HTTP server."""

HOST: str = "127.0.0.1"
PORT: int = 3000
RECV_BUFFER_SIZE: int = 65_536
LISTEN_BACKLOG: int = 128
SELECT_TIMEOUT_SECS: float = 0.2
LOG_FORMAT: str = "plain"
LOG_LEVEL: str = "INFO"
