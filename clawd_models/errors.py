from pathlib import Path
from typing import Sequence


class ClawdModelsError(Exception):
    """Base user-facing application error."""


class ConfigFileError(ClawdModelsError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class ConfigParseError(ConfigFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class ConfigSchemaError(ConfigFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class PersistError(ConfigFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot write config ({detail})")


class ImportFileNotFoundError(ConfigFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="File not found")


class ResolutionError(ClawdModelsError):
    """Raised when no config file can be selected."""


class UnknownTargetError(ResolutionError):
    def __init__(self, target_id: str, known: Sequence[str]) -> None:
        self.target_id = target_id
        self.known = list(known)
        super().__init__(
            f"Unknown bot: {target_id}. Available: {', '.join(self.known)}"
        )


class InvalidTargetError(UnknownTargetError):
    pass


class ConfigFileNotFoundError(ResolutionError):
    def __init__(self, label: str, path: Path) -> None:
        self.label = label
        self.path = path
        super().__init__(f"{label} config not found at {path}")


class NoTargetsAvailableError(ResolutionError):
    def __init__(self, expected: Sequence[tuple[str, Path]]) -> None:
        self.expected = list(expected)
        lines = ["No bot configurations found.", "Expected locations:"]
        lines.extend(f"  {label}: {path}" for label, path in self.expected)
        super().__init__("\n".join(lines))


class OperationRefused(ClawdModelsError):
    """A lookup or validation failure that leaves the document untouched."""


class ProviderNotFoundError(OperationRefused):
    def __init__(self, name: str, hint: str | None = None) -> None:
        self.name = name
        message = f'Provider "{name}" not found.'
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class ModelNotFoundError(OperationRefused):
    def __init__(self, provider: str, model_id: str) -> None:
        self.provider = provider
        self.model_id = model_id
        super().__init__(f'Model "{model_id}" not found in provider "{provider}".')


class DuplicateModelError(OperationRefused):
    def __init__(self, provider: str, model_id: str) -> None:
        self.provider = provider
        self.model_id = model_id
        super().__init__(
            f'Model "{model_id}" already exists in provider "{provider}".'
        )


class AgentNotFoundError(OperationRefused):
    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(f'Agent "{agent_id}" not found.')


class DuplicateAgentError(OperationRefused):
    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(f'Agent "{agent_id}" already exists.')


class NoDefaultModelError(OperationRefused):
    def __init__(self) -> None:
        super().__init__(
            "No default model configured. "
            'Use "clawd-models agents:set-default" to set one.'
        )


class UnsupportedApiError(OperationRefused):
    def __init__(self, api: str | None) -> None:
        self.api = api
        super().__init__(f"Unsupported API type: {api}")


class TransportError(ClawdModelsError):
    def __init__(self, endpoint: str, detail: str) -> None:
        self.endpoint = endpoint
        self.detail = detail
        super().__init__(f"Request failed: {detail}")


class EditorError(ClawdModelsError):
    pass
