class ApplicationError(Exception):
    def __init__(self, message, extra=None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}


class KeyMaterialError(ApplicationError):
    """Signing keys missing, unreadable or not a matching RSA pair"""
    pass


class KeyIntegrityError(KeyMaterialError):
    """A freshly produced signature did not verify against the public key"""
    pass


class DiscoveryError(ApplicationError):
    """The cache directory could not be fetched or decoded"""
    pass


class PurgeError(ApplicationError):
    """Failure scoped to a single cache; the other caches are still attempted"""
    pass


class InvalidOriginURLError(PurgeError):
    pass


class CacheResolutionError(PurgeError):
    pass


class RefreshURLError(PurgeError):
    pass


class SigningError(PurgeError):
    pass


class DispatchError(PurgeError):
    pass
