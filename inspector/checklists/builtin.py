"""Built-in checklists: roles, environments, data bags and data bag items."""

from typing import Any, Dict, Optional, Set, Tuple

from inspector.checklist import Checklist
from inspector.models import PresenceItem


class DefinitionChecklist(Checklist):
    """Objects stored under one server collection and one local folder."""

    collection: str = ""
    folder: str = ""
    ignored_names: frozenset = frozenset()

    def fetch_remote_names(self) -> Set[str]:
        return self.remote.list_names(self.collection) - self.ignored_names

    def fetch_local_names(self) -> Set[str]:
        return self.loader.list_names(self.folder) - self.ignored_names

    def load_server_item(self, name: str) -> Optional[Dict[str, Any]]:
        return self.remote.get_object(f"{self.collection}/{name}")

    def load_local_item(self, name: str) -> Optional[Dict[str, Any]]:
        return self.loader.load(self.folder, name)


class RolesChecklist(DefinitionChecklist):
    name = "roles"
    collection = "roles"
    folder = "roles"


class EnvironmentsChecklist(DefinitionChecklist):
    name = "environments"
    collection = "environments"
    folder = "environments"
    # Created by the server itself, never defined in a repository.
    ignored_names = frozenset({"_default"})


class DataBagsChecklist(Checklist):
    """Only checks that each data bag exists on both sides."""

    name = "data_bags"
    item_class = PresenceItem
    collection = "data"
    folder = "data_bags"

    def fetch_remote_names(self) -> Set[str]:
        return self.remote.list_names(self.collection)

    def fetch_local_names(self) -> Set[str]:
        return set(self.loader.list_folders(self.folder))

    def load_server_item(self, name: str) -> Optional[Dict[str, Any]]:
        if self.remote.get_object(f"{self.collection}/{name}") is None:
            return None
        return {"name": name}

    def load_local_item(self, name: str) -> Optional[Dict[str, Any]]:
        if name not in self.loader.list_folders(self.folder):
            return None
        return {"name": name}


class DataBagItemsChecklist(Checklist):
    """Items of every data bag, named ``<bag>/<item>``."""

    name = "data_bag_items"
    collection = "data"
    folder = "data_bags"

    def fetch_remote_names(self) -> Set[str]:
        names = set()
        for bag in self.remote.list_names(self.collection):
            for item in self.remote.list_names(f"{self.collection}/{bag}"):
                names.add(f"{bag}/{item}")
        return names

    def fetch_local_names(self) -> Set[str]:
        names = set()
        for bag in self.loader.list_folders(self.folder):
            for item in self.loader.list_names(f"{self.folder}/{bag}"):
                names.add(f"{bag}/{item}")
        return names

    def load_server_item(self, name: str) -> Optional[Dict[str, Any]]:
        bag, item = split_item_name(name)
        return self.remote.get_object(f"{self.collection}/{bag}/{item}")

    def load_local_item(self, name: str) -> Optional[Dict[str, Any]]:
        bag, item = split_item_name(name)
        return self.loader.load(f"{self.folder}/{bag}", item)


def split_item_name(name: str) -> Tuple[str, str]:
    bag, _, item = name.partition("/")
    if not bag or not item:
        raise ValueError(f"Data bag item names look like '<bag>/<item>', got '{name}'")
    return bag, item
