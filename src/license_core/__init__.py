"""License list generator: renders a license list into every published format."""

from license_core.__version__ import __version__
from license_core.exceptions import LicenseGeneratorError
from license_core.generator import GeneratorState, generate_license_data
from license_core.model import DeprecatedLicenseRecord, License, LicenseException
from license_core.warning_policy import ERROR_STATUS, WARNING_STATUS

__all__ = [
    "__version__",
    "License",
    "LicenseException",
    "DeprecatedLicenseRecord",
    "LicenseGeneratorError",
    "GeneratorState",
    "generate_license_data",
    "ERROR_STATUS",
    "WARNING_STATUS",
]
