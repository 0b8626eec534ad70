class ServiceKitError(Exception):
    """Base for all servicekit exceptions."""


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(ServiceKitError): ...


class RegistryLookupError(RegistryError, LookupError): ...
