"""
Normalisation du texte des noms de fichiers.

Ce module fournit les fonctions de nettoyage appliquees avant le parsing
et lors de la construction des chemins :

- normalize : reconstruit l'Unicode d'un nom encode en Windows-1252
- clean_title : separateurs, espaces autour des crochets et parentheses
- simplify : forme de comparaison (minuscules, sans accents, alphanumerique)
- sanitize_for_filesystem : caracteres interdits dans un composant de chemin
"""

import re
import unicodedata
from typing import Optional

# Extension finale : un point suivi de caracteres sans point ni espace
EXTENSION_PATTERN = re.compile(r"(\.[^.\s]+)$")

# Caracteres de controle C1 : octets 0x80-0x9F lus comme Latin-1
_C1_CONTROLS = re.compile(r"[\x80-\x9f]")

# Marques diacritiques combinantes apres decomposition NFD
_COMBINING_MARKS = re.compile("[\u0300-\u036f]")

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _redecode_c1(match: re.Match) -> str:
    """Relit un caractere de controle C1 comme un octet Windows-1252."""
    char = match.group(0)
    try:
        return char.encode("latin-1").decode("cp1252")
    except UnicodeDecodeError:
        # 0x81, 0x8D, 0x8F, 0x90, 0x9D n'ont pas de correspondance
        return char


def normalize(raw: str) -> str:
    """
    Reconstruit le texte Unicode d'un nom de fichier mal encode.

    Les noms produits sous Windows-1252 arrivent comme des octets bruts :
    les octets non UTF-8 sont exposes par le systeme sous forme de
    surrogates (surrogateescape) ou de caracteres de controle C1.
    Ils sont relus en Windows-1252.

    Ne leve jamais d'exception : si le decodage ne peut pas ameliorer
    la chaine, elle est retournee telle quelle. Idempotente sur un texte
    deja correct.

    Args:
        raw: Nom de fichier tel que liste par le systeme.

    Returns:
        Nom de fichier en Unicode.
    """
    try:
        data = raw.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return raw

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        try:
            text = data.decode("cp1252")
        except UnicodeDecodeError:
            return raw

    return _C1_CONTROLS.sub(_redecode_c1, text)


def split_extension(filename: str) -> Optional[tuple[str, str]]:
    """
    Separe le nom de base et l'extension d'un nom de fichier.

    Returns:
        (base, extension sans point), ou None si pas d'extension.
    """
    match = EXTENSION_PATTERN.search(filename)
    if match is None:
        return None
    return filename[: match.start()], match.group(1)[1:]


def clean_title(text: str) -> str:
    """
    Nettoie un nom de fichier pour le parsing.

    Transformations appliquees :
    - Suppression de l'extension finale
    - Points et underscores -> espaces
    - Espaces repousses a l'exterieur des crochets et parentheses
    - Espaces multiples reduits a un seul, bords supprimes

    Args:
        text: Nom de fichier (normalise).

    Returns:
        Titre nettoye.
    """
    text = EXTENSION_PATTERN.sub("", text)
    text = re.sub(r"[._]", " ", text)
    text = re.sub(r"\[\s*", " [", text)
    text = re.sub(r"\s*\]", "] ", text)
    text = re.sub(r"\(\s*", " (", text)
    text = re.sub(r"\s*\)", ") ", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def simplify(text: str) -> str:
    """
    Forme simplifiee d'un titre, pour les comparaisons uniquement.

    Minuscules, decomposition NFD, suppression des accents puis de tout
    caractere non alphanumerique ASCII. "Amélie" -> "amelie".
    """
    text = unicodedata.normalize("NFD", text.lower())
    text = _COMBINING_MARKS.sub("", text)
    return _NON_ALNUM.sub("", text)


def sanitize_for_filesystem(text: str) -> str:
    """
    Nettoie un composant de chemin (dossier ou fichier).

    - "/" et NUL -> "-"
    - ":" -> "."
    """
    return text.replace("/", "-").replace("\0", "-").replace(":", ".")
