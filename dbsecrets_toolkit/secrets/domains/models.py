"""Domain models for database secrets."""
import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict
from urllib.parse import quote

from .errors import SecretParseError

VERSION_STAGE_CURRENT = "AWSCURRENT"


@dataclass
class SecretDetails:
    """Database connection parameters stored in a secret.

    Every field defaults to its zero value, so ``SecretDetails()`` is the
    empty record.
    """
    dbname: str = ""
    port: int = 0
    username: str = ""
    password: str = field(default="", repr=False)
    host: str = ""
    dbsslmode: str = ""

    @classmethod
    def from_json(cls, text: str) -> "SecretDetails":
        """
        Parse the JSON secret payload.

        Keys match case-insensitively (DBName fills dbname). Unknown keys are
        ignored; missing or null keys keep their zero value.

        Args:
            text: JSON document, e.g. '{"dbname": "d", "port": 5432, ...}'

        Returns:
            Populated SecretDetails

        Raises:
            SecretParseError: If the payload is not a JSON object or a known
                field has the wrong type
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SecretParseError(f"Secret payload is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise SecretParseError(
                f"Secret payload must be a JSON object, got {type(data).__name__}"
            )

        # Keys match case-insensitively; the last duplicate wins
        folded = {k.lower(): v for k, v in data.items() if isinstance(k, str)}

        values: Dict[str, Any] = {}
        for f in fields(cls):
            value = folded.get(f.name)
            if value is None:
                continue
            if f.type is int:
                # bool is an int subclass but never a valid port
                if isinstance(value, bool) or not isinstance(value, int):
                    raise SecretParseError(
                        f"Field '{f.name}' must be an integer, got {type(value).__name__}"
                    )
            elif not isinstance(value, str):
                raise SecretParseError(
                    f"Field '{f.name}' must be a string, got {type(value).__name__}"
                )
            values[f.name] = value

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def is_zero(self) -> bool:
        return self == SecretDetails()

    def connection_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for a libpq style driver (e.g. psycopg.connect)."""
        kwargs = {
            "host": self.host,
            "port": self.port,
            "dbname": self.dbname,
            "user": self.username,
            "password": self.password,
            "sslmode": self.dbsslmode,
        }
        return {k: v for k, v in kwargs.items() if v}

    def dsn(self) -> str:
        """Build a postgresql:// connection URL."""
        auth = quote(self.username, safe="")
        if self.password:
            auth += ":" + quote(self.password, safe="")
        netloc = f"{auth}@{self.host}" if auth else self.host
        if self.port:
            netloc += f":{self.port}"
        url = f"postgresql://{netloc}/{quote(self.dbname, safe='')}"
        if self.dbsslmode:
            url += f"?sslmode={quote(self.dbsslmode, safe='')}"
        return url


@dataclass(frozen=True)
class SecretsConfig:
    """Where to fetch a secret from."""
    secret_id: str
    region: str
    version_stage: str = VERSION_STAGE_CURRENT
