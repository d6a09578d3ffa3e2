"""Transport layer exports and default scheme registration.

Importing this package registers the built-in transports, so
``TransportFactory.create_all()`` is ready to use without manual setup.
"""

from resource_loader.libs.transport.base_transport import BaseTransport, FetchResult
from resource_loader.libs.transport.data_transport import DataTransport, parse_data_uri
from resource_loader.libs.transport.file_transport import FileTransport
from resource_loader.libs.transport.http_transport import HttpTransport
from resource_loader.libs.transport.transport_factory import TransportFactory

if "file" not in TransportFactory._TRANSPORTS:
    TransportFactory.register_transport("file", FileTransport)
if "http" not in TransportFactory._TRANSPORTS:
    TransportFactory.register_transport("http", HttpTransport)
if "https" not in TransportFactory._TRANSPORTS:
    TransportFactory.register_transport("https", HttpTransport)
if "data" not in TransportFactory._TRANSPORTS:
    TransportFactory.register_transport("data", DataTransport)

__all__ = [
    "BaseTransport",
    "FetchResult",
    "FileTransport",
    "HttpTransport",
    "DataTransport",
    "parse_data_uri",
    "TransportFactory",
]
