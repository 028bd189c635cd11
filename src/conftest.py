import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from src.amp_cache.schemas import CacheDirectory
from src.amp_cache.selectors import get_key_material
from src.amp_cache.tests.fakes import CACHES_JSON, FakeAmpNetwork
from src.crypto.keys import KeyMaterial


def _generate_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key():
    return _generate_private_key()


@pytest.fixture(scope="session")
def keys(private_key):
    return KeyMaterial(private_key=private_key, public_key=private_key.public_key())


@pytest.fixture(scope="session")
def other_keys():
    pk = _generate_private_key()
    return KeyMaterial(private_key=pk, public_key=pk.public_key())


@pytest.fixture
def pem_files(tmp_path, private_key):
    """PKCS#1 private key and PKIX public key, as the publishing side ships them."""
    private_path = tmp_path / "private-key.pem"
    public_path = tmp_path / "apikey.pub"
    private_path.write_bytes(
        private_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.TraditionalOpenSSL,
            serialization.NoEncryption(),
        )
    )
    public_path.write_bytes(
        private_key.public_key().public_bytes(
            serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo
        )
    )
    return str(private_path), str(public_path)


@pytest.fixture
def directory():
    return CacheDirectory.model_validate(CACHES_JSON)


@pytest.fixture(autouse=True)
def _fresh_key_cache():
    get_key_material.cache_clear()
    yield
    get_key_material.cache_clear()


@pytest.fixture
def network():
    return FakeAmpNetwork()


@pytest.fixture
def fake_http(monkeypatch, network):
    """Route every client built by the app through the fake network."""
    monkeypatch.setattr("src.amp_cache.http_client.build_http_client", lambda **kw: network.client())
    return network
