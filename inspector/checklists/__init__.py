from inspector.checklist import Checklist, ChecklistRegistry, registry
from inspector.checklists.builtin import (
    DataBagItemsChecklist,
    DataBagsChecklist,
    DefinitionChecklist,
    EnvironmentsChecklist,
    RolesChecklist,
)

registry.register(RolesChecklist)
registry.register(EnvironmentsChecklist)
registry.register(DataBagsChecklist)
registry.register(DataBagItemsChecklist)

__all__ = [
    "Checklist",
    "ChecklistRegistry",
    "registry",
    "DefinitionChecklist",
    "RolesChecklist",
    "EnvironmentsChecklist",
    "DataBagsChecklist",
    "DataBagItemsChecklist",
]
