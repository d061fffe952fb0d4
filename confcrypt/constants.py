"""
Centralized Constants Module for confcrypt.

Property keys, default values and the encrypted-literal markers live here
so the resolver, the detector and the CLI agree on them.

Usage:
    from confcrypt.constants import EncryptorProperties, Defaults, Markers

    password = environment.get_property(EncryptorProperties.PASSWORD)
"""

# =============================================================================
# ENCRYPTOR PROPERTY KEYS
# =============================================================================

class EncryptorProperties:
    """Configuration keys read by the cipher configuration resolver."""
    PREFIX = "encryptor"

    PASSWORD = f"{PREFIX}.password"
    ALGORITHM = f"{PREFIX}.algorithm"
    KEY_OBTENTION_ITERATIONS = f"{PREFIX}.keyObtentionIterations"
    POOL_SIZE = f"{PREFIX}.poolSize"
    PROVIDER_NAME = f"{PREFIX}.providerName"
    SALT_GENERATOR_CLASSNAME = f"{PREFIX}.saltGeneratorClassname"
    STRING_OUTPUT_TYPE = f"{PREFIX}.stringOutputType"


# =============================================================================
# DEFAULT VALUES
# =============================================================================

class Defaults:
    """Defaults applied when an optional encryptor property is absent."""
    ALGORITHM = "PBEWithMD5AndDES"
    KEY_OBTENTION_ITERATIONS = "1000"
    POOL_SIZE = "1"
    PROVIDER_NAME = "SunJCE"
    SALT_GENERATOR_CLASSNAME = "org.jasypt.salt.RandomSaltGenerator"
    STRING_OUTPUT_TYPE = "base64"


# =============================================================================
# ENCRYPTED LITERAL MARKERS
# =============================================================================

class Markers:
    """Delimiters of an encrypted configuration value: ENC(<payload>)."""
    PREFIX = "ENC("
    SUFFIX = ")"


# =============================================================================
# OUTPUT ENCODINGS
# =============================================================================

class OutputType:
    """Text encodings for encrypted bytes."""
    BASE64 = "base64"
    HEXADECIMAL = "hexadecimal"

    ALL = (BASE64, HEXADECIMAL)


# =============================================================================
# CLI ENVIRONMENT
# =============================================================================

class CliEnv:
    """Environment variables consulted by encryptctl."""
    PASSWORD = "ENCRYPTOR_PASSWORD"
