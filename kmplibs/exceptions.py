"""Custom exceptions for kmplibs."""


class KmpLibsError(Exception):
    """Base exception for all kmplibs errors."""


class ConfigError(KmpLibsError):
    """Raised when an environment or CLI setting has an invalid value."""


class CatalogError(KmpLibsError):
    """Raised when the library catalog cannot be read or validated."""


class MetadataError(KmpLibsError):
    """Raised when maven-metadata.xml is malformed or incomplete."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"invalid maven metadata at {url}: {reason}")


class CompatibilityError(KmpLibsError):
    """Raised in strict mode when a kotlin-stdlib dependency declares no version."""

    def __init__(self, url: str, module: str):
        self.url = url
        self.module = module
        super().__init__(f"dependency {module} in {url} declares no version")


class MissingLicenseError(KmpLibsError):
    """Raised in strict mode when a GitHub repository has no license."""

    def __init__(self, repo: str):
        self.repo = repo
        super().__init__(f"GitHub repository {repo} has no license set")
