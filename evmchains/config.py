"""Registry configuration."""

from dataclasses import dataclass, field
from typing import Optional, List

from dataclasses_json import dataclass_json


#: URL schemes we accept for RPC endpoints and explorers
DEFAULT_URL_SCHEMES = ["http", "https", "ws", "wss"]


@dataclass_json
@dataclass
class Configuration:
    """Configuration for loading a chain registry."""

    #: Folder containing `eip155-{chain_id}.json` files.
    #:
    #: If not given, use the dataset embedded in the package.
    data_path: Optional[str] = None

    #: Accepted schemes for RPC and explorer URLs.
    #:
    #: Any other scheme makes the load fail.
    url_schemes: List[str] = field(default_factory=lambda: list(DEFAULT_URL_SCHEMES))
