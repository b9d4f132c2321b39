class RegistryError(Exception):
    @property
    def kind(self):
        return type(self).__name__


class InvalidIdentifierFormat(RegistryError, ValueError):
    pass


class MissingRequiredField(RegistryError):
    def __init__(self, fields, context="asset"):
        self.fields = list(fields)
        super().__init__(f"Missing required fields for {context}: {', '.join(self.fields)}")


class UnknownField(RegistryError):
    pass


class InvalidFieldValue(RegistryError):
    pass


class SymbolTooLong(RegistryError):
    pass


class UnsupportedImageFormat(RegistryError):
    pass


class ChecksumMismatch(RegistryError):
    pass


class ChecksumUnavailable(RegistryError):
    pass


class FileNotFound(RegistryError):
    pass


class MalformedJSON(RegistryError):
    pass


class FilesystemFailure(RegistryError):
    pass


class NetworkFailure(RegistryError):
    pass


class HTTPStatusFailure(NetworkFailure):
    def __init__(self, url, status_code):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to download {url}: HTTP {status_code}")


class TransportFailure(NetworkFailure):
    pass


class TimeoutFailure(NetworkFailure):
    pass


class MetadataValidationFailed(RegistryError):
    def __init__(self, violations):
        self.violations = list(violations)
        lines = "\n".join(f"- {v}" for v in self.violations)
        super().__init__(f"Metadata validation failed:\n{lines}")
