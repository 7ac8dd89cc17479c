"""Distributor registration — command and handler."""

from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from marketplace.distributor.distributor import Distributor
from marketplace.domain import marketplace


@marketplace.command(part_of="Distributor")
class RegisterDistributor:
    name = String(required=True, max_length=255)
    description = Text()
    city = String(max_length=100)


@marketplace.command_handler(part_of=Distributor)
class RegisterDistributorHandler:
    @handle(RegisterDistributor)
    def register_distributor(self, command):
        distributor = Distributor.register(
            name=command.name,
            description=command.description,
            city=command.city,
        )
        current_domain.repository_for(Distributor).add(distributor)
        return str(distributor.id)
