"""Snapshot of a service that docker compose reports as running."""

from pydantic import BaseModel, ConfigDict, Field

from compose_lifecycle.core.responses import ComposePsResponse


class RunningService(BaseModel):
    """A running compose service and the details needed to connect to it."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Container name")
    service: str = Field(description="Service name in the compose file")
    image: str = Field(description="Image the container runs")
    state: str = Field(description="Container state reported by docker compose")
    project: str = Field(default="", description="Compose project name")
    host: str = Field(description="Host the published ports are reachable on")
    labels: dict[str, str] = Field(default_factory=dict, description="Container labels")
    ports: dict[int, int] = Field(
        default_factory=dict,
        description="Published host ports, keyed by container port (tcp preferred over udp)",
    )

    @classmethod
    def from_ps_response(cls, response: ComposePsResponse, host: str) -> "RunningService":
        """Build a running service from a `docker compose ps` entry."""
        ports: dict[int, int] = {}
        tcp_ports: set[int] = set()
        for publisher in response.publishers:
            if not publisher.published_port:
                continue
            is_tcp = publisher.protocol == "tcp"
            # First tcp mapping wins, otherwise the first mapping of any protocol
            if publisher.target_port not in ports or (
                is_tcp and publisher.target_port not in tcp_ports
            ):
                ports[publisher.target_port] = publisher.published_port
            if is_tcp:
                tcp_ports.add(publisher.target_port)
        return cls(
            name=response.name,
            service=response.service,
            image=response.image,
            state=response.state,
            project=response.project,
            host=host,
            labels=dict(response.labels),
            ports=ports,
        )

    def get_port(self, container_port: int) -> int | None:
        """Return the host port a container port is published on, if any.

        When a port is published for both tcp and udp, the tcp mapping is returned.
        """
        return self.ports.get(container_port)
