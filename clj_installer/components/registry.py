"""
Registry for bootstrap components.

Components register themselves with a decorator, declaring which other
components must run before them. The orchestrator asks the registry for a
dependency-ordered list.
"""

from typing import Any, Dict, List, Optional, Set, Type

from clj_installer.components.base_component import BaseComponent


class ComponentRegistry:
    """
    Registry for component classes.

    Registration order is preserved, and ``resolve_dependencies`` is a
    depth-first topological sort, so the resulting order is deterministic.
    """

    _registry: Dict[str, Type[BaseComponent]] = {}

    @classmethod
    def register(cls, name: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Decorator for registering component classes.

        Args:
            name: The name of the component.
            metadata: Optional metadata such as ``dependencies`` and
                ``description``.

        Returns:
            A decorator function that registers the component class.
        """

        def decorator(
            component_class: Type[BaseComponent],
        ) -> Type[BaseComponent]:
            if name in cls._registry:
                raise ValueError(
                    f"Component with name '{name}' already registered"
                )

            component_class.metadata = {
                "dependencies": [],
                "description": "",
                **(metadata or {}),
                "name": name,
            }
            cls._registry[name] = component_class
            return component_class

        return decorator

    @classmethod
    def get_component(cls, name: str) -> Type[BaseComponent]:
        """
        Raises:
            KeyError: If no component with the given name is registered.
        """
        if name not in cls._registry:
            raise KeyError(f"No component registered with name '{name}'")
        return cls._registry[name]

    @classmethod
    def get_component_dependencies(cls, name: str) -> Set[str]:
        component_class = cls.get_component(name)
        return set(component_class.metadata.get("dependencies", []))

    @classmethod
    def resolve_dependencies(cls, components: List[str]) -> List[str]:
        """
        Resolve dependencies for a list of components.

        Args:
            components: A list of component names.

        Returns:
            Component names in the order they should run. Dependencies of a
            component always come before it.

        Raises:
            KeyError: If a component or dependency is not registered.
            ValueError: If there is a circular dependency.
        """
        result: List[str] = []
        visited: Set[str] = set()
        temp_visited: Set[str] = set()

        def visit(component: str) -> None:
            if component in temp_visited:
                raise ValueError(
                    f"Circular dependency detected involving '{component}'"
                )
            if component in visited:
                return

            temp_visited.add(component)
            for dependency in sorted(cls.get_component_dependencies(component)):
                visit(dependency)
            temp_visited.remove(component)

            visited.add(component)
            result.append(component)

        for component in components:
            visit(component)

        return result
