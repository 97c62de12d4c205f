"""Configures pytest further and provides the shared fixtures."""
import io

from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

from rsasample import keystore
from rsasample.runtime import Runtime


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip tests generating real key pairs")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--skip-slow"):
        return
    skip = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def keypair() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def runtime(tmp_path):
    with Runtime(tmp_path, io.StringIO()) as rt:
        yield rt


@pytest.fixture
def key_files(tmp_path, keypair):
    """Writes the session key pair the way KeyStore does, returns (private, public) paths."""
    priv, pub = tmp_path / "private.key", tmp_path / "public.key"
    keystore.write_key(priv, keystore.export_private_key(keypair))
    keystore.write_key(pub, keystore.export_public_key(keypair.public_key()))
    return priv, pub


@pytest.fixture
def sample(tmp_path):
    src = tmp_path / "sample.txt"
    src.write_bytes(b"The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()")
    return src
