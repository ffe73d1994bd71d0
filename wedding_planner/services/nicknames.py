"""
Nickname classes used to match formal and short given names.

Each entry lists the names a key can be swapped for. The table is kept
symmetric by hand; ``alias_set`` also looks up reverse entries but does not
compute a transitive closure.
"""

from typing import Dict, List, Set

NICKNAMES: Dict[str, List[str]] = {
    "matthew": ["matt"],
    "matt": ["matthew"],
    "william": ["bill", "billy", "will"],
    "bill": ["william", "billy", "will"],
    "billy": ["william", "bill", "will"],
    "will": ["william", "bill", "billy"],
    "robert": ["rob", "bob", "bobby", "robbie"],
    "rob": ["robert", "bob", "bobby", "robbie"],
    "bob": ["robert", "rob", "bobby", "robbie"],
    "bobby": ["robert", "rob", "bob", "robbie"],
    "james": ["jim", "jimmy"],
    "jim": ["james", "jimmy"],
    "jimmy": ["james", "jim"],
    "alexander": ["alex"],
    "alex": ["alexander"],
    "anthony": ["tony"],
    "tony": ["anthony"],
    "charles": ["charlie", "chuck"],
    "charlie": ["charles", "chuck"],
    "chuck": ["charles", "charlie"],
    "christopher": ["chris"],
    "chris": ["christopher"],
    "daniel": ["dan", "danny"],
    "dan": ["daniel", "danny"],
    "danny": ["daniel", "dan"],
    "elizabeth": ["liz", "lizzy", "beth", "eliza", "elle", "ellie", "liza"],
    "liz": ["elizabeth", "lizzy", "beth", "eliza", "elle", "ellie", "liza"],
    "lizzy": ["elizabeth", "liz", "beth", "eliza", "elle", "ellie", "liza"],
    "beth": ["elizabeth", "liz", "lizzy", "eliza", "elle", "ellie", "liza"],
    "eliza": ["elizabeth", "liz", "lizzy", "beth", "elle", "ellie", "liza"],
    "elle": ["elizabeth", "liz", "lizzy", "beth", "eliza", "ellie", "liza"],
    "ellie": ["elizabeth", "liz", "lizzy", "beth", "eliza", "elle", "liza"],
    "liza": ["elizabeth", "liz", "lizzy", "beth", "eliza", "elle", "ellie"],
    "michael": ["mike"],
    "mike": ["michael"],
    "nicholas": ["nick"],
    "nick": ["nicholas"],
    "joseph": ["joe", "joey"],
    "joe": ["joseph", "joey"],
    "joey": ["joseph", "joe"],
    "andrew": ["drew", "andy"],
    "drew": ["andrew", "andy"],
    "andy": ["andrew", "drew"],
    "katherine": ["kate", "katie", "kathryn", "kathy", "kat", "kathleen"],
    "kate": ["katherine", "katie", "kathryn", "kathy", "kat", "kathleen"],
    "katie": ["katherine", "kate", "kathryn", "kathy", "kat", "kathleen"],
    "kathryn": ["katherine", "kate", "katie", "kathy", "kat", "kathleen"],
    "kathy": ["katherine", "kate", "katie", "kathryn", "kat", "kathleen"],
    "kat": ["katherine", "kate", "katie", "kathryn", "kathy", "kathleen"],
    "kathleen": ["kathy", "katherine", "kate", "katie", "kathryn", "kat"],
    "mary": ["patty"],
    "patty": ["mary"],
    "lukas": ["luke"],
    "luke": ["lukas"],
    "mackenzie": ["kenz"],
    "kenz": ["mackenzie"],
    "enrico": ["rick"],
    "rick": ["enrico"],
}


def alias_set(name: str) -> Set[str]:
    """The lowercased name, its declared nicknames, and any key listing it"""
    lower = name.strip().lower()
    aliases = {lower}
    aliases.update(NICKNAMES.get(lower, []))
    for key, values in NICKNAMES.items():
        if lower in values:
            aliases.add(key)
    return aliases
