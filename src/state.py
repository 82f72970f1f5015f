from typing import Dict, Iterator

from ledger import Client


class LedgerState:
    """
    Client registry owned by a single run.
    Clients are created on first sight and dropped when the run is summarized.
    """

    def __init__(self):
        self._clients: Dict[int, Client] = {}

    def get_or_create_client(self, client_id: int) -> Client:
        """Get existing client or create new one."""
        client = self._clients.get(client_id)
        if client is None:
            client = Client(client_id)
            self._clients[client_id] = client
        return client

    def __len__(self) -> int:
        return len(self._clients)

    def drain_clients(self) -> Iterator[Client]:
        """Yield every client once, removing it from the registry."""
        while self._clients:
            _, client = self._clients.popitem()
            yield client
