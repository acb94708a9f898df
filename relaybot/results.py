from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Resolved:
    """Valeur obtenue par un appel externe, ou sa valeur de repli.

    ``fallback_reason`` est renseigné quand l'appel a échoué et que ``value``
    contient la valeur de repli (lien d'origine, nom par défaut...).
    """

    value: str
    fallback_reason: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.fallback_reason is not None
