"""Entity forms for the admin dialogs.

Each module (``customer``, ``vehicle``, ``job``, ``transportation``)
provides the form's value shape, its schema, select options,
``initial_values()`` for add/edit, ``to_payload()`` for the API call,
and ``create_form()`` returning a ready ``FormController``::

    from fleetforms.entities import customer

    form = customer.create_form(existing, on_submit=save)
"""

from fleetforms.entities import customer, job, transportation, vehicle
from fleetforms.entities._common import SelectOption

__all__ = [
    "SelectOption",
    "customer",
    "job",
    "transportation",
    "vehicle",
]
