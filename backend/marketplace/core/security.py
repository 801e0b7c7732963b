from passlib.context import CryptContext

# bcrypt salts each hash, so equal passwords produce different hashes
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    return pwd_context.hash(password)
