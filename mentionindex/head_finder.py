"""Table-driven syntactic head finder for constituency trees.

Each phrase label maps to an ordered list of rules. A rule is a search
direction plus the child labels it looks for; the first rule that matches a
child picks the head child. When nothing matches, the first child in the
direction of the first rule is used.
"""

from mentionindex.config import Language
from mentionindex.document import ParseTree

HeadRule = tuple[str, tuple[str, ...]]

ENGLISH_HEAD_RULES: dict[str, list[HeadRule]] = {
    "ROOT": [("left", ("S", "SQ", "SINV", "FRAG", "NP"))],
    "NP": [
        ("right", ("NN", "NNP", "NNPS", "NNS", "NML", "NX", "POS", "JJR")),
        ("left", ("NP", "PRP")),
        ("right", ("$", "ADJP", "PRN")),
        ("right", ("CD",)),
        ("right", ("JJ", "JJS", "RB", "QP")),
    ],
    "NML": [("right", ("NN", "NNP", "NNPS", "NNS", "NML"))],
    "S": [("left", ("TO", "VP", "S", "SBAR", "ADJP", "UCP", "NP"))],
    "SBAR": [("left", ("WHNP", "WHPP", "WHADVP", "WHADJP", "IN", "DT", "S", "SQ", "SINV", "SBAR", "FRAG"))],
    "VP": [("left", ("TO", "VBD", "VBN", "MD", "VBZ", "VB", "VBG", "VBP", "VP", "ADJP", "NN", "NNS", "NP"))],
    "PP": [("left", ("IN", "TO", "VBG", "VBN", "RP", "FW"))],
    "ADJP": [("left", ("JJ", "JJR", "JJS", "VBN", "VBG", "ADJP", "NNS", "QP", "NN"))],
    "ADVP": [("right", ("RB", "RBR", "RBS", "FW", "ADVP", "TO", "CD", "JJR", "JJ", "IN", "NP"))],
    "QP": [("left", ("$", "IN", "NNS", "NN", "JJ", "RB", "DT", "CD", "QP"))],
    "WHNP": [("left", ("WDT", "WP", "WP$", "WHADJP", "WHPP", "WHNP"))],
}

CHINESE_HEAD_RULES: dict[str, list[HeadRule]] = {
    "ROOT": [("left", ("IP", "CP", "NP"))],
    "NP": [("right", ("NN", "NR", "NT", "NP", "PN", "NN-SHORT", "NR-SHORT", "CD", "QP"))],
    "IP": [("right", ("VP", "IP", "NP"))],
    "CP": [("right", ("DEC", "WHNP", "WHPP")), ("left", ("IP", "VP"))],
    "VP": [("left", ("VA", "VC", "VE", "VV", "BA", "LB", "VCD", "VSB", "VRD", "VNV", "VCP", "VP"))],
    "PP": [("left", ("P", "PP"))],
    "DNP": [("right", ("DEG", "DEC"))],
    "QP": [("right", ("QP", "CLP", "CD", "OD", "NP", "NT", "M"))],
    "ADJP": [("right", ("ADJP", "JJ", "AD", "NN", "CS"))],
    "ADVP": [("right", ("ADVP", "AD"))],
}


def base_label(label: str) -> str:
    """Strip functional tags and indices, e.g. 'NP-SBJ-1' -> 'NP'."""
    if label in ("-LRB-", "-RRB-", "-NONE-"):
        return label
    return label.split("-")[0].split("=")[0] or label


class HeadFinder:
    def __init__(self, rules: dict[str, list[HeadRule]]):
        self.rules = rules

    def head_child(self, tree: ParseTree) -> int:
        """Return the position of the head child of a phrasal node."""
        if tree.is_leaf:
            raise ValueError("A leaf has no head child")
        if len(tree.children) == 1:
            return 0
        rules = self.rules.get(base_label(tree.label), [("left", ())])
        positions = list(range(len(tree.children)))
        for direction, labels in rules:
            order = positions if direction == "left" else positions[::-1]
            for i in order:
                if base_label(tree.children[i].label) in labels:
                    return i
        return 0 if rules[0][0] == "left" else len(tree.children) - 1

    def find_head(self, tree: ParseTree) -> int:
        """Return the leaf position (relative to this tree) of the head word."""
        if tree.is_leaf or tree.is_preterminal:
            return 0
        child = self.head_child(tree)
        offset = sum(len(c.leaves()) for c in tree.children[:child])
        return offset + self.find_head(tree.children[child])


def get_head_finder(language: Language) -> HeadFinder:
    """Return the head finder for a language."""
    if language == Language.CHINESE:
        return HeadFinder(CHINESE_HEAD_RULES)
    return HeadFinder(ENGLISH_HEAD_RULES)
