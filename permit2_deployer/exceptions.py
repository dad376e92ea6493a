"""Exception classes for the Permit2 deployment tool."""


class DeployerError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigMissingError(DeployerError, ValueError):
    """Raised when required environment configuration is absent."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            "Missing required environment variables: " + ", ".join(self.missing)
        )


class ConfigInvalidError(DeployerError, ValueError):
    """Raised when a configuration value cannot be interpreted."""

    pass


class ArtifactNotFoundError(DeployerError, FileNotFoundError):
    """Raised when a compiled contract file does not exist."""

    def __init__(self, kind: str, path):
        self.kind = kind
        self.path = path
        super().__init__(f"{kind} contract file not found: {path}")


class ArtifactParseError(DeployerError, ValueError):
    """Raised when a compiled contract file is not a valid contract class."""

    def __init__(self, kind: str, path, reason):
        self.kind = kind
        self.path = path
        super().__init__(f"failed to parse {kind} contract {path}: {reason}")


class ConnectionSetupError(DeployerError, RuntimeError):
    """Raised when the RPC client or signing account cannot be built."""

    pass


class DeclareFailedError(DeployerError, RuntimeError):
    """Raised when the declare transaction fails for a reason other than an existing declaration."""

    pass


class InvalidClassHashError(DeployerError, ValueError):
    """Raised when a class hash is not a valid field element."""

    pass


class DeploySubmissionError(DeployerError, RuntimeError):
    """Raised when the UDC deploy transaction cannot be submitted."""

    pass


class ReceiptTimeoutError(DeployerError, TimeoutError):
    """Raised when a transaction receipt does not arrive before the deadline."""

    def __init__(self, tx_hash: int, timeout: float):
        self.tx_hash = tx_hash
        self.timeout = timeout
        super().__init__(
            f"transaction {hex(tx_hash)} not accepted within {timeout:g}s"
        )


class ReceiptFailedError(DeployerError, RuntimeError):
    """Raised when a transaction is reverted or rejected by the network."""

    def __init__(self, tx_hash: int, reason):
        self.tx_hash = tx_hash
        super().__init__(f"transaction {hex(tx_hash)} failed: {reason}")


class ReportWriteError(DeployerError, OSError):
    """Raised when the deployment report cannot be written."""

    pass
