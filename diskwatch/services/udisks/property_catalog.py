import logging
from typing import Any, Callable, Optional

from jeepney import DBusAddress, new_method_call
from jeepney.auth import AuthenticationError
from jeepney.io.blocking import open_dbus_connection
from jeepney.wrappers import DBusErrorResponse, unwrap_msg

from ...core.exceptions import CatalogConnectionError
from .property_values import ManagedObjects, PropertyValue

UDISKS2_BUS_NAME = "org.freedesktop.UDisks2"
UDISKS2_OBJECT_PATH = "/org/freedesktop/UDisks2"
OBJECT_MANAGER_INTERFACE = "org.freedesktop.DBus.ObjectManager"

# Takes a timeout in seconds, returns the raw GetManagedObjects dict
Transport = Callable[[float], Any]


def system_bus_transport(timeout: float) -> Any:
    """Call GetManagedObjects on the UDisks2 daemon over the system bus."""
    address = DBusAddress(
        UDISKS2_OBJECT_PATH,
        bus_name=UDISKS2_BUS_NAME,
        interface=OBJECT_MANAGER_INTERFACE,
    )
    message = new_method_call(address, "GetManagedObjects")

    with open_dbus_connection(bus="SYSTEM") as connection:
        reply = connection.send_and_get_reply(message, timeout=timeout)

    body = unwrap_msg(reply)
    return body[0]


class PropertyCatalog:
    """
    Snapshot of every object UDisks2 manages, with typed property values.

    One ``fetch()`` is one round trip to the daemon. Anything that stops the
    round trip from completing is a CatalogConnectionError.
    """

    def __init__(self, transport: Optional[Transport] = None, timeout: float = 5.0):
        self._transport = transport or system_bus_transport
        self._timeout = timeout

    def fetch(self) -> ManagedObjects:
        logging.debug(f"Querying {UDISKS2_BUS_NAME} managed objects")

        try:
            raw = self._transport(self._timeout)
        except DBusErrorResponse as e:
            raise CatalogConnectionError(f"UDisks2 returned an error: {e}") from e
        except (OSError, TimeoutError, AuthenticationError) as e:
            raise CatalogConnectionError(f"Cannot reach UDisks2 on the system bus: {e}") from e

        if not isinstance(raw, dict):
            raise CatalogConnectionError(
                f"Unexpected GetManagedObjects reply type: {type(raw).__name__}"
            )

        objects: ManagedObjects = {}
        for object_path, interfaces in raw.items():
            if not isinstance(interfaces, dict):
                logging.debug(f"Skipping {object_path}: malformed interface map")
                continue
            objects[str(object_path)] = {
                str(interface): {
                    str(name): PropertyValue.from_variant(variant)
                    for name, variant in properties.items()
                }
                for interface, properties in interfaces.items()
                if isinstance(properties, dict)
            }

        logging.debug(f"UDisks2 reported {len(objects)} managed objects")
        return objects
