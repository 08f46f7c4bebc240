"""Generation of the device's security context.

An RSA key pair plus a self-signed certificate identify this device to its
peers. The certificate hash (SHA-256 over the DER encoding) is the
fingerprint peers pin.
"""

from __future__ import annotations

import datetime as _dt
import hashlib

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from domain.models import StoredSecurityContext

__all__ = ["generate_security_context", "certificate_hash"]

KEY_SIZE = 2048
VALIDITY_DAYS = 10 * 365
COMMON_NAME = "LocalSend User"


def certificate_hash(certificate_pem: str) -> str:
    cert = x509.load_pem_x509_certificate(certificate_pem.encode("ascii"))
    der = cert.public_bytes(serialization.Encoding.DER)
    return hashlib.sha256(der).hexdigest()


def generate_security_context(key_size: int = KEY_SIZE) -> StoredSecurityContext:
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    public_key = private_key.public_key()

    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, COMMON_NAME)])
    now = _dt.datetime.now(_dt.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(public_key)
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - _dt.timedelta(days=1))
        .not_valid_after(now + _dt.timedelta(days=VALIDITY_DAYS))
        .sign(private_key, hashes.SHA256())
    )

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    public_pem = public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")
    cert_der = cert.public_bytes(serialization.Encoding.DER)
    cert_pem = cert.public_bytes(serialization.Encoding.PEM).decode("ascii")

    return StoredSecurityContext(
        private_key=private_pem,
        public_key=public_pem,
        certificate=cert_pem,
        certificate_hash=hashlib.sha256(cert_der).hexdigest(),
    )
