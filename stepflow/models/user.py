from dataclasses import dataclass


@dataclass
class User:
    id: int
    username: str
    email: str
    # Plaintext, there is no credential handling in this service
    password: str
