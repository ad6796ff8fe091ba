"""
Credential providers.

A provider hands back a complete DatabaseConfig or raises
CredentialError. The scan itself never talks to the terminal; only
PromptCredentialProvider does, and it can be given any input callable.
"""

from dataclasses import replace
from typing import Callable, Optional

from rich.console import Console
from rich.prompt import Prompt

from .config import DatabaseConfig
from .protocol.errors import CredentialError


MAX_PROMPT_TRIES = 3


class CredentialProvider:
    """Interface: provide() -> DatabaseConfig."""

    def provide(self) -> DatabaseConfig:
        raise NotImplementedError


class StaticCredentialProvider(CredentialProvider):
    """Credentials already known (config file, flags, environment)."""

    def __init__(self, database: DatabaseConfig):
        self.database = database

    def provide(self) -> DatabaseConfig:
        return self.database


class PromptCredentialProvider(CredentialProvider):
    """
    Asks for host, port, user, password and database name.

    Each field is re-asked on empty input, up to `max_tries` times,
    after which CredentialError is raised.
    """

    def __init__(
        self,
        base: Optional[DatabaseConfig] = None,
        ask: Optional[Callable[[str, bool], str]] = None,
        max_tries: int = MAX_PROMPT_TRIES,
        console: Optional[Console] = None,
    ):
        """
        Args:
            base: Values not prompted for (sslmode, timeout) come from here
            ask: Callable(prompt, password) -> answer; defaults to rich Prompt
            max_tries: Attempts allowed per field
            console: Console used by the default prompt (stderr)
        """
        self.base = base or DatabaseConfig()
        self.max_tries = max_tries
        self.console = console or Console(stderr=True)
        self._ask = ask or self._rich_ask

    def _rich_ask(self, prompt: str, password: bool) -> str:
        return Prompt.ask(prompt, password=password, console=self.console)

    def read_param(self, prompt: str, password: bool = False) -> str:
        """Ask until a non-empty answer or the retry limit."""
        for _ in range(self.max_tries):
            try:
                answer = self._ask(prompt, password)
            except EOFError as e:
                raise CredentialError(f"input closed while reading '{prompt}'") from e
            answer = (answer or "").strip()
            if answer:
                return answer
        raise CredentialError(f"too many tries for '{prompt}'")

    def provide(self) -> DatabaseConfig:
        host = self.read_param("please specify host")
        port_str = self.read_param("please specify port")
        try:
            port = int(port_str)
        except ValueError as e:
            raise CredentialError(f"port must be a number, got '{port_str}'") from e
        user = self.read_param("please specify user")
        password = self.read_param("please specify password", password=True)
        name = self.read_param("please specify db name")

        return replace(
            self.base,
            host=host,
            port=port,
            user=user,
            password=password,
            name=name,
        )
