"""
StoreManager for the Prompt Pocket store.

Every operation is one transaction: load the full snapshot from storage,
locate the target node(s), mutate the loaded copy, and save the full snapshot
back. A failure at any step leaves the stored snapshot untouched.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from pydantic import ValidationError as PydanticValidationError

from pocket.constants import (
    COPY_SUFFIX,
    IMPORT_MERGE,
    IMPORT_REPLACE,
    IMPORT_STRATEGIES,
    INITIALIZED_KEY,
    MAX_GROUP_DEPTH,
    SAMPLE_DATA,
    STORAGE_KEY,
)
from pocket.exceptions import (
    DestinationGroupNotFoundError,
    DuplicateError,
    GroupNotFoundError,
    InvalidOperationError,
    ParentGroupNotFoundError,
    PromptNotFoundError,
    SourceGroupNotFoundError,
    StorageError,
    ValidationError,
)
from pocket.managers.events import Event, EventBus, EventType, NodeEvent
from pocket.managers.navigation_manager import (
    clone_group,
    contains_group,
    find_group,
    find_group_container,
    find_parent_group,
    find_prompt,
    group_depth,
    iter_groups,
    remove_group,
    subtree_height,
)
from pocket.managers.search_manager import PromptMatch, search_prompts
from pocket.managers.storage_manager import StoragePort
from pocket.models.base import Group, GroupColor, Prompt
from pocket.models.files import PromptTree
from pocket.models.updates import GroupUpdate, PromptUpdate, build_changes

logger = logging.getLogger(__name__)


class StoreManager:
    """
    Manages the prompt tree.

    Handles:
    - Loading the snapshot, seeding sample data on the very first load
    - Group CRUD, subgroups, reorder and move
    - Prompt CRUD, reorder and move between groups
    - Duplication, search and import

    Transactions are serialized with a re-entrant lock, so one StoreManager
    is a single writer for every caller in the process. Separate processes
    sharing the same storage are last-writer-wins.

    Usage:
        storage = StorageManager(Path("~/.prompt-pocket").expanduser())
        store = StoreManager(storage)

        group = store.create_group("Work", color="blue")
        prompt = store.create_prompt(group.id, "Greeting", "Hi")
        store.update_prompt(group.id, prompt.id, title="Hello")
    """

    def __init__(
        self, storage: StoragePort, event_bus: Optional[EventBus] = None
    ) -> None:
        """
        Initialize StoreManager.

        Args:
            storage: Key-value backend holding the snapshot.
            event_bus: Bus notified after each successful change.
        """
        self.storage = storage
        self.event_bus = event_bus or EventBus()
        self._lock = threading.RLock()

    # =========================================================================
    # Persistence
    # =========================================================================

    def _read(self, key: str) -> Any:
        try:
            return self.storage.get(key)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e

    def _write(self, key: str, value: Any) -> None:
        try:
            self.storage.set(key, value)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to write '{key}': {e}") from e

    def _delete(self, key: str) -> None:
        try:
            self.storage.delete(key)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to delete '{key}': {e}") from e

    def _persist(self, tree: PromptTree) -> None:
        self._write(STORAGE_KEY, tree.model_dump(mode="json"))

    def _publish(self, event: Event) -> None:
        self.event_bus.publish(event)

    def load(self) -> PromptTree:
        """Load the current tree.

        On the very first load with nothing stored, the built-in sample tree
        is saved and returned. Later loads with nothing stored return an
        empty tree.

        Raises:
            StorageError: If storage fails or the stored snapshot is malformed.
        """
        with self._lock:
            stored = self._read(STORAGE_KEY)
            if stored is None:
                if self._read(INITIALIZED_KEY):
                    return PromptTree()
                sample = PromptTree.model_validate(SAMPLE_DATA)
                self._persist(sample)
                self._write(INITIALIZED_KEY, True)
                logger.info("Seeded store with %d sample groups", len(sample.groups))
                return sample

            try:
                return PromptTree.model_validate(stored)
            except PydanticValidationError as e:
                raise StorageError(f"Stored prompt data is malformed: {e}")

    def save(self, tree: PromptTree) -> None:
        """Overwrite the stored snapshot with tree."""
        with self._lock:
            self._persist(tree)
        self._publish(Event(type=EventType.STORE_SAVED))

    @contextmanager
    def transaction(self) -> Iterator[PromptTree]:
        """Load the tree, yield it for mutation, then save it.

        If the body raises, nothing is saved.
        """
        with self._lock:
            tree = self.load()
            yield tree
            self._persist(tree)

    def reset(self) -> None:
        """Delete all prompt data and clear the first-run flag."""
        with self._lock:
            self._delete(STORAGE_KEY)
            self._delete(INITIALIZED_KEY)
        logger.info("Store reset")
        self._publish(Event(type=EventType.STORE_RESET))

    # =========================================================================
    # Tree checks
    # =========================================================================

    def _ensure_new_ids(self, tree: PromptTree, node: Group | Prompt) -> None:
        """Reject a node whose id, or any id inside it, is already taken."""
        taken = set()
        for group in iter_groups(tree.groups):
            taken.add(group.id)
            taken.update(prompt.id for prompt in group.prompts)

        if isinstance(node, Prompt):
            incoming = [node.id]
        else:
            incoming = []
            for group in iter_groups([node]):
                incoming.append(group.id)
                incoming.extend(prompt.id for prompt in group.prompts)

        for entity_id in incoming:
            if entity_id in taken:
                raise DuplicateError(f"Id '{entity_id}' is already in use.")
            taken.add(entity_id)

    def _ensure_depth(self, depth_above: int, group: Group) -> None:
        """Reject placing group below depth_above levels if it would nest too deep."""
        if depth_above + subtree_height(group) > MAX_GROUP_DEPTH:
            raise InvalidOperationError(
                f"Groups cannot be nested more than {MAX_GROUP_DEPTH} levels deep."
            )

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_group(self, group_id: str) -> Group:
        """Get a group by id from anywhere in the tree."""
        group = find_group(self.load().groups, group_id)
        if group is None:
            raise GroupNotFoundError(group_id)
        return group

    def get_prompt(self, prompt_id: str) -> Prompt:
        """Get a prompt by id from anywhere in the tree."""
        prompt = find_prompt(self.load().groups, prompt_id)
        if prompt is None:
            raise PromptNotFoundError(prompt_id)
        return prompt

    def get_prompt_text(self, prompt_id: str) -> str:
        """Get the content of a prompt, e.g. for copying."""
        return self.get_prompt(prompt_id).content

    def find_prompt_group(self, prompt_id: str) -> Group:
        """Get the group that owns a prompt."""
        group = find_parent_group(self.load().groups, prompt_id)
        if group is None:
            raise PromptNotFoundError(prompt_id)
        return group

    def search(
        self, query: str = "", group_id: Optional[str] = None
    ) -> List[PromptMatch]:
        """Search prompts by title and content. See search_prompts.

        Raises:
            GroupNotFoundError: If group_id is given and does not resolve.
        """
        roots = self.load().groups
        if group_id is not None and find_group(roots, group_id) is None:
            raise GroupNotFoundError(group_id)
        return search_prompts(roots, query, group_id)

    # =========================================================================
    # Groups
    # =========================================================================

    def add_group(self, group: Group) -> Group:
        """Append a group to the root sequence.

        The caller supplies the group with its id already generated.

        Raises:
            DuplicateError: If an id in the group is already used.
            InvalidOperationError: If groups would nest too deep.
        """
        with self.transaction() as tree:
            self._ensure_new_ids(tree, group)
            self._ensure_depth(0, group)
            tree.groups.append(group)
        logger.debug("Added root group %s", group.id)
        self._publish(NodeEvent(type=EventType.GROUP_CREATED, node_id=group.id))
        return group

    def add_subgroup(self, parent_id: str, group: Group) -> Group:
        """Append a group to a parent group's children.

        Raises:
            ParentGroupNotFoundError: If parent_id does not resolve.
            DuplicateError: If an id in the group is already used.
            InvalidOperationError: If groups would nest too deep.
        """
        with self.transaction() as tree:
            parent = find_group(tree.groups, parent_id)
            if parent is None:
                raise ParentGroupNotFoundError(parent_id)
            self._ensure_new_ids(tree, group)
            self._ensure_depth(group_depth(tree.groups, parent_id), group)
            parent.children.append(group)
        logger.debug("Added group %s under %s", group.id, parent_id)
        self._publish(
            NodeEvent(type=EventType.GROUP_CREATED, node_id=group.id, group_id=parent_id)
        )
        return group

    def create_group(
        self,
        name: str,
        color: GroupColor | str | None = None,
        parent_id: Optional[str] = None,
    ) -> Group:
        """Create a group with a fresh id, at the root or under parent_id.

        Raises:
            ValidationError: If color is not a known group color.
            ParentGroupNotFoundError: If parent_id does not resolve.
        """
        group = Group(name=name)
        try:
            group.set_color(color)
        except ValueError:
            raise ValidationError(
                f"Invalid color: '{color}'. Color must be one of: "
                f"{', '.join(c.value for c in GroupColor)}."
            )
        if parent_id:
            return self.add_subgroup(parent_id, group)
        return self.add_group(group)

    def update_group(self, group_id: str, **updates: Any) -> Group:
        """Patch fields of a group. Only the given fields change.

        Args:
            group_id: Group to update.
            **updates: name and/or color. color=None clears the color.

        Raises:
            ValidationError: If no fields are given or a field is invalid.
            GroupNotFoundError: If group_id does not resolve.
        """
        changes = build_changes(GroupUpdate, updates)
        with self.transaction() as tree:
            group = find_group(tree.groups, group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            for key, value in changes.items():
                setattr(group, key, value)
        self._publish(
            NodeEvent(type=EventType.GROUP_UPDATED, node_id=group_id, data=changes)
        )
        return group

    def delete_group(self, group_id: str) -> Group:
        """Delete a group and everything beneath it.

        Returns:
            The removed group.

        Raises:
            GroupNotFoundError: If group_id does not resolve.
        """
        with self.transaction() as tree:
            removed = remove_group(tree.groups, group_id)
            if removed is None:
                raise GroupNotFoundError(group_id)
        logger.debug("Deleted group %s", group_id)
        self._publish(NodeEvent(type=EventType.GROUP_DELETED, node_id=group_id))
        return removed

    def reorder_group(self, group_id: str, new_index: int) -> None:
        """Move a root group to new_index within the root sequence.

        An index past the end appends.

        Raises:
            GroupNotFoundError: If group_id is not a root group.
        """
        with self.transaction() as tree:
            for index, group in enumerate(tree.groups):
                if group.id == group_id:
                    break
            else:
                raise GroupNotFoundError(group_id)
            tree.groups.insert(new_index, tree.groups.pop(index))
        self._publish(NodeEvent(type=EventType.GROUP_MOVED, node_id=group_id))

    def move_group(
        self,
        group_id: str,
        target_group_id: Optional[str] = None,
        new_index: Optional[int] = None,
    ) -> None:
        """Move a group under another group, or back to the root.

        The group is detached from its current container and inserted into
        target_group_id's children (the root sequence when None) at new_index,
        or appended when new_index is None.

        Raises:
            GroupNotFoundError: If group_id does not resolve.
            DestinationGroupNotFoundError: If target_group_id does not resolve.
            InvalidOperationError: If the target is the group or its descendant,
                or groups would nest too deep.
        """
        with self.transaction() as tree:
            location = find_group_container(tree.groups, group_id)
            if location is None:
                raise GroupNotFoundError(group_id)
            container, index, _ = location
            group = container[index]

            if target_group_id is None:
                destination = tree.groups
            else:
                target = find_group(tree.groups, target_group_id)
                if target is None:
                    raise DestinationGroupNotFoundError(target_group_id)
                if contains_group(group, target_group_id):
                    raise InvalidOperationError(
                        f"Cannot move group '{group_id}' into itself or one of its subgroups."
                    )
                self._ensure_depth(group_depth(tree.groups, target_group_id), group)
                destination = target.children

            container.pop(index)
            if new_index is None:
                destination.append(group)
            else:
                destination.insert(new_index, group)
        self._publish(
            NodeEvent(
                type=EventType.GROUP_MOVED, node_id=group_id, group_id=target_group_id
            )
        )

    def duplicate_group(self, group_id: str) -> Group:
        """Copy a group's subtree with fresh ids and append it to the root.

        Every copied group is named "<name> (Copy)".

        Raises:
            GroupNotFoundError: If group_id does not resolve.
        """
        with self.transaction() as tree:
            group = find_group(tree.groups, group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            clone = clone_group(group, COPY_SUFFIX)
            tree.groups.append(clone)
        self._publish(NodeEvent(type=EventType.GROUP_CREATED, node_id=clone.id))
        return clone

    # =========================================================================
    # Prompts
    # =========================================================================

    def add_prompt_to_group(self, group_id: str, prompt: Prompt) -> Prompt:
        """Append a prompt to a group's prompts.

        Raises:
            GroupNotFoundError: If group_id does not resolve.
            DuplicateError: If the prompt's id is already used.
        """
        with self.transaction() as tree:
            group = find_group(tree.groups, group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            self._ensure_new_ids(tree, prompt)
            group.prompts.append(prompt)
        logger.debug("Added prompt %s to %s", prompt.id, group_id)
        self._publish(
            NodeEvent(type=EventType.PROMPT_CREATED, node_id=prompt.id, group_id=group_id)
        )
        return prompt

    def create_prompt(self, group_id: str, title: str, content: str = "") -> Prompt:
        """Create a prompt with a fresh id in a group."""
        return self.add_prompt_to_group(group_id, Prompt(title=title, content=content))

    def update_prompt(self, group_id: str, prompt_id: str, **updates: Any) -> Prompt:
        """Patch fields of a prompt within a group. Only the given fields change.

        Args:
            group_id: Group owning the prompt.
            prompt_id: Prompt to update.
            **updates: title and/or content.

        Raises:
            ValidationError: If no fields are given or a field is invalid.
            GroupNotFoundError: If group_id does not resolve.
            PromptNotFoundError: If the prompt is not in that group.
        """
        changes = build_changes(PromptUpdate, updates)
        with self.transaction() as tree:
            group = find_group(tree.groups, group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            prompt = group.get_prompt(prompt_id)
            if prompt is None:
                raise PromptNotFoundError(prompt_id)
            for key, value in changes.items():
                setattr(prompt, key, value)
        self._publish(
            NodeEvent(
                type=EventType.PROMPT_UPDATED,
                node_id=prompt_id,
                group_id=group_id,
                data=changes,
            )
        )
        return prompt

    def delete_prompt(self, group_id: str, prompt_id: str) -> Prompt:
        """Delete a prompt from one specific group.

        The prompt is only looked up in group_id, even if it exists elsewhere.

        Raises:
            GroupNotFoundError: If group_id does not resolve.
            PromptNotFoundError: If the prompt is not in that group.
        """
        with self.transaction() as tree:
            group = find_group(tree.groups, group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            index = group.prompt_index(prompt_id)
            if index == -1:
                raise PromptNotFoundError(prompt_id)
            removed = group.prompts.pop(index)
        self._publish(
            NodeEvent(type=EventType.PROMPT_DELETED, node_id=prompt_id, group_id=group_id)
        )
        return removed

    def reorder_prompt(self, group_id: str, prompt_id: str, new_index: int) -> None:
        """Move a prompt to new_index within its group. An index past the end appends.

        Raises:
            GroupNotFoundError: If group_id does not resolve.
            PromptNotFoundError: If the prompt is not in that group.
        """
        with self.transaction() as tree:
            group = find_group(tree.groups, group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            index = group.prompt_index(prompt_id)
            if index == -1:
                raise PromptNotFoundError(prompt_id)
            group.prompts.insert(new_index, group.prompts.pop(index))
        self._publish(
            NodeEvent(type=EventType.PROMPT_MOVED, node_id=prompt_id, group_id=group_id)
        )

    def move_prompt_to_group(
        self,
        prompt_id: str,
        from_group_id: str,
        to_group_id: str,
        new_index: Optional[int] = None,
    ) -> None:
        """Move a prompt from one group to another.

        Inserted at new_index in the destination, or appended when None.

        Raises:
            SourceGroupNotFoundError: If from_group_id does not resolve.
            DestinationGroupNotFoundError: If to_group_id does not resolve.
            PromptNotFoundError: If the prompt is not in the source group.
        """
        with self.transaction() as tree:
            source = find_group(tree.groups, from_group_id)
            destination = find_group(tree.groups, to_group_id)
            if source is None:
                raise SourceGroupNotFoundError(from_group_id)
            if destination is None:
                raise DestinationGroupNotFoundError(to_group_id)

            index = source.prompt_index(prompt_id)
            if index == -1:
                raise PromptNotFoundError(
                    prompt_id, f"Prompt not found in source group: '{prompt_id}'"
                )
            prompt = source.prompts.pop(index)
            if new_index is None:
                destination.prompts.append(prompt)
            else:
                destination.prompts.insert(new_index, prompt)
        self._publish(
            NodeEvent(type=EventType.PROMPT_MOVED, node_id=prompt_id, group_id=to_group_id)
        )

    def duplicate_prompt(self, prompt_id: str) -> Prompt:
        """Append a copy titled "<title> (Copy)" to the prompt's own group.

        Raises:
            PromptNotFoundError: If prompt_id does not resolve.
        """
        with self.transaction() as tree:
            group = find_parent_group(tree.groups, prompt_id)
            if group is None:
                raise PromptNotFoundError(prompt_id)
            original = group.get_prompt(prompt_id)
            duplicate = Prompt(
                title=f"{original.title}{COPY_SUFFIX}", content=original.content
            )
            group.prompts.append(duplicate)
        self._publish(
            NodeEvent(type=EventType.PROMPT_CREATED, node_id=duplicate.id, group_id=group.id)
        )
        return duplicate

    # =========================================================================
    # Import
    # =========================================================================

    def import_tree(
        self, imported: PromptTree, strategy: str = IMPORT_MERGE, rekey: bool = False
    ) -> PromptTree:
        """Bring an already validated tree into the store.

        Args:
            imported: Tree to import.
            strategy: "replace" substitutes the whole store; "merge" appends
                the imported root groups. Merging does not deduplicate ids.
            rekey: Give every imported group and prompt a fresh id first.

        Returns:
            The stored tree after import.

        Raises:
            ValidationError: If strategy is unknown.
        """
        if strategy not in IMPORT_STRATEGIES:
            raise ValidationError(
                f"Invalid import strategy: '{strategy}'. "
                f"Strategy must be one of: {', '.join(IMPORT_STRATEGIES)}."
            )

        groups = [group.model_copy(deep=True) for group in imported.groups]
        if rekey:
            groups = [clone_group(group) for group in groups]

        with self._lock:
            if strategy == IMPORT_REPLACE:
                result = PromptTree(groups=groups)
                self._persist(result)
            else:
                with self.transaction() as result:
                    result.groups.extend(groups)

        logger.info(
            "Imported %d groups (strategy=%s, rekey=%s)", len(groups), strategy, rekey
        )
        self._publish(Event(type=EventType.STORE_IMPORTED, data={"strategy": strategy}))
        return result
