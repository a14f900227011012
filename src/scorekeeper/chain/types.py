"""Chain-facing value types."""

from dataclasses import dataclass

# Proxy type the nominator accounts are registered with. A proxy of any
# other type makes the proxyAnnounced call fail on chain.
STAKING_PROXY_TYPE = "Staking"

EXPLORER_URLS = {
    "polkadot": "https://polkadot.subscan.io/account/{address}",
    "kusama": "https://kusama.subscan.io/account/{address}",
}


@dataclass(frozen=True)
class Announcement:
    """An outstanding announced proxy call held by the proxy pallet."""

    call_hash: str
    real: str
    height: int | None = None


@dataclass(frozen=True)
class ProxyCall:
    """A ``proxy.proxyAnnounced`` wrapping of ``staking.nominate(targets)``.

    ``delegate`` announced the call earlier and now executes it on behalf
    of ``real``.
    """

    delegate: str
    real: str
    targets: tuple[str, ...]
    force_proxy_type: str = STAKING_PROXY_TYPE


def address_url(address: str, network: str) -> str:
    """Render an account link for notifications.

    Networks without a known explorer render the bare address.
    """
    template = EXPLORER_URLS.get(network)
    if template is None:
        return address
    return template.format(address=address)
