from typing import Dict, List, Optional, Union

from podsmith.details.as_iterator import str_iter


class TargetDefinition:
    """Podfile target block an aggregate target was created for.

    `configuration_whitelist` maps a build configuration name to the
    dependencies that should only be integrated for that configuration, for
    example ``{"Debug": ["Reveal-SDK"]}``. Dependencies that appear in no
    list are integrated for every configuration.
    """

    def __init__(
        self,
        name: str,
        configuration_whitelist: Optional[Dict[str, Union[str, List[str]]]] = None,
    ):
        self.name = name
        self.configuration_whitelist: Dict[str, List[str]] = {
            config: list(str_iter(names))
            for config, names in (configuration_whitelist or {}).items()
        }

    def pod_whitelisted_for_configuration(self, dependency_name: str, configuration_name: str) -> bool:
        found = False
        for config, names in self.configuration_whitelist.items():
            if dependency_name in names:
                found = True
                if config.lower() == configuration_name.lower():
                    return True
        return not found

    def __str__(self):
        return self.name
