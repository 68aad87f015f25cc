"""Azure CLI token resolver."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from plannerclone.auth.base import TokenResolver
from plannerclone.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class AzureCliTokenResolver(TokenResolver):
    """Reads a token from the signed-in ``az`` session; never signs in itself."""

    resource: str = "https://graph.microsoft.com"

    async def resolve(self) -> str:
        try:
            process = await asyncio.create_subprocess_exec(
                "az",
                "account",
                "get-access-token",
                "--resource",
                self.resource,
                "--query",
                "accessToken",
                "--output",
                "tsv",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise AuthenticationError(f"Failed to execute az CLI: {exc}") from exc

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            details = stderr.decode(errors="replace").strip()
            message = f"az account get-access-token failed for {self.resource}"
            if details:
                message = f"{message}: {details}"
            raise AuthenticationError(message)

        token = stdout.decode(errors="replace").strip()
        if not token:
            raise AuthenticationError(f"az account get-access-token returned an empty token for {self.resource}")

        return token
