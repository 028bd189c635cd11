import pathlib
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from src.core.exceptions import KeyIntegrityError, KeyMaterialError, SigningError


@dataclass(frozen=True)
class KeyMaterial:
    """
    RSA key pair used to sign update-cache requests (RSASSA-PKCS1-v1_5 / SHA-256).
    Immutable once loaded; safe to share between callers.
    """

    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey

    def __post_init__(self):
        if not isinstance(self.private_key, rsa.RSAPrivateKey):
            raise KeyMaterialError("Private key is not an RSA key")
        if not isinstance(self.public_key, rsa.RSAPublicKey):
            raise KeyMaterialError("Public key is not an RSA key")
        if self.private_key.public_key().public_numbers() != self.public_key.public_numbers():
            raise KeyMaterialError("Public key does not match the private key")

    @classmethod
    def from_pem(cls, private_pem: bytes, public_pem: bytes) -> "KeyMaterial":
        # PKCS#1 ("RSA PRIVATE KEY") and PKCS#8 are both accepted
        try:
            private_key = serialization.load_pem_private_key(private_pem, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise KeyMaterialError(f"Invalid private key PEM: {e}") from e
        # PKIX ("PUBLIC KEY") or PKCS#1 ("RSA PUBLIC KEY")
        try:
            public_key = serialization.load_pem_public_key(public_pem)
        except (ValueError, UnsupportedAlgorithm) as e:
            raise KeyMaterialError(f"Invalid public key PEM: {e}") from e
        return cls(private_key=private_key, public_key=public_key)

    def sign(self, message: bytes) -> bytes:
        """
        Sign `message` and check the result against the paired public key before
        handing it out. A failed check means the pair is corrupted.
        """
        try:
            signature = self.private_key.sign(message, padding.PKCS1v15(), hashes.SHA256())
        except (ValueError, TypeError) as e:
            raise SigningError(f"RSA signing failed: {e}") from e
        if not self.verify(message, signature):
            raise KeyIntegrityError("Signature self-check failed against the public key")
        return signature

    def verify(self, message: bytes, signature: bytes) -> bool:
        try:
            self.public_key.verify(signature, message, padding.PKCS1v15(), hashes.SHA256())
            return True
        except InvalidSignature:
            return False

    def public_key_pem(self) -> bytes:
        return self.public_key.public_bytes(
            serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo
        )


def _read(path: str, what: str) -> bytes:
    if not path:
        raise KeyMaterialError(f"No {what} file configured")
    try:
        return pathlib.Path(path).read_bytes()
    except OSError as e:
        raise KeyMaterialError(f"Cannot read {what} file {path}: {e}") from e


def load_key_material(private_key_file: str, public_key_file: str) -> KeyMaterial:
    return KeyMaterial.from_pem(
        _read(private_key_file, "private key"),
        _read(public_key_file, "public key"),
    )
