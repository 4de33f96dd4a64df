from __future__ import annotations


class CopilotError(Exception):
    pass


class ConfigurationError(CopilotError):
    pass


class CompletionError(CopilotError):
    """The completion provider call itself failed (network, auth, rate limit)."""


class StructuredOutputError(CopilotError):
    """The provider answered, but not with the shape the stage asked for."""


class StageTimeoutError(CopilotError):
    def __init__(self, stage: str, timeout_s: float) -> None:
        super().__init__(f"{stage} stage timed out after {timeout_s:g}s")
        self.stage = stage
        self.timeout_s = timeout_s
