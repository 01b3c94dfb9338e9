"""Servicios por recurso (blog, user, tagged).

Por qué un paquete:
- Agrupa módulos por recurso de la API.
- Cada servicio depende de `core.interfaces.requester.Requester`.
"""

from adapters.services.blog import BlogService
from adapters.services.tagged import TaggedService
from adapters.services.users import UsersService

__all__ = [
	"BlogService",
	"TaggedService",
	"UsersService",
]
