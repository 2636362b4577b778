"""Resolution of the host that running services are reachable on."""

import os
from collections.abc import Mapping
from urllib.parse import urlparse

from compose_lifecycle.utils.logger import get_logger

logger = get_logger(__name__)

LOCALHOST = "127.0.0.1"
REMOTE_SCHEMES = frozenset({"tcp", "http", "https"})


class DockerHost:
    """Deduces the hostname used to connect to published service ports."""

    @staticmethod
    def get(hostname: str | None = None, environ: Mapping[str, str] | None = None) -> str:
        """Return the hostname for running services.

        An explicit hostname wins. Otherwise a remote ``DOCKER_HOST`` supplies
        the host, falling back to the loopback address.

        Args:
            hostname: Explicit hostname, or None to deduce it
            environ: Environment to read ``DOCKER_HOST`` from (defaults to os.environ)

        Returns:
            The hostname

        """
        if hostname:
            return hostname

        env = os.environ if environ is None else environ
        docker_host = env.get("DOCKER_HOST", "").strip()
        if docker_host:
            parsed = urlparse(docker_host)
            if parsed.scheme in REMOTE_SCHEMES and parsed.hostname:
                logger.debug(f"Using host {parsed.hostname} from DOCKER_HOST")
                return parsed.hostname

        return LOCALHOST
