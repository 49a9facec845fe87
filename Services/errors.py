class ComponentGenerationError(Exception):
    """Base class for request-level failures of the generate pipeline."""


class InvalidTreeError(ComponentGenerationError):
    """The submitted node tree is empty or malformed."""


class ProvisioningError(ComponentGenerationError):
    """The target React project could not be scaffolded."""


class OutputWriteError(ComponentGenerationError):
    def __init__(self, name: str, path: str, reason: str = ""):
        self.name = name
        self.path = path
        msg = f"Could not write component '{name}' to {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
