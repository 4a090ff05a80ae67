from data.tag_resolver import TagResolver

VOCAB = ["Pain relief", "Anti-inflammatory", "Memory-enhancement"]


def test_loose_spelling_resolves_to_vocabulary():
    tr = TagResolver(VOCAB, alias_map={})
    assert tr.resolve("  pain RELIEF ") == "Pain relief"
    assert tr.resolve("anti inflammatory") == "Anti-inflammatory"
    assert tr.resolve("memory_enhancement") == "Memory-enhancement"


def test_alias_mapping():
    tr = TagResolver(VOCAB, alias_map={"Pain relief": ["Analgesic", "Schmerzlinderung"]})
    assert tr.resolve("analgesic") == "Pain relief"
    assert tr.resolve("Schmerzlinderung") == "Pain relief"


def test_alias_to_unknown_target_is_ignored():
    tr = TagResolver(VOCAB, alias_map={"Nope": ["whatever"]})
    assert tr.resolve("whatever") == "whatever"


def test_unknown_tag_passes_through():
    tr = TagResolver(VOCAB, alias_map={})
    assert tr.resolve(" Sparkly ") == "Sparkly"


def test_deduplicate_and_order_preservation():
    tr = TagResolver(VOCAB, alias_map={"Pain relief": ["Analgesic"]})
    tags = ["analgesic", "Anti-inflammatory", "pain relief", "ANTI INFLAMMATORY"]
    resolved, mapping = tr.resolve_list(tags)
    assert resolved == ["Pain relief", "Anti-inflammatory"]
    assert mapping[0] == ("analgesic", "Pain relief")


def test_alias_file_from_env(tmp_path, monkeypatch):
    p = tmp_path / "aliases.json"
    p.write_text('{"Anti-inflammatory": ["antiphlogistic"]}', encoding="utf-8")
    monkeypatch.setenv("TAG_ALIAS_PATH", str(p))
    assert TagResolver(VOCAB).resolve("Antiphlogistic") == "Anti-inflammatory"


def test_non_latin_tags_resolve_to_themselves():
    tr = TagResolver(["Схема", "鎮静"], alias_map={})
    assert tr.resolve("Схема") == "Схема"
    assert tr.resolve("鎮静") == "鎮静"
    assert tr.resolve(" схема ") == "Схема"


def test_exact_member_wins_over_loose_neighbour():
    for vocab in (["Memory-enhancement", "Memory enhancement"], ["Memory enhancement", "Memory-enhancement"]):
        tr = TagResolver(vocab, alias_map={})
        assert tr.resolve("Memory-enhancement") == "Memory-enhancement"
        assert tr.resolve("Memory enhancement") == "Memory enhancement"
        # shared loose spelling is ambiguous and stays as typed
        assert tr.resolve("memory_enhancement") == "memory_enhancement"


def test_punctuation_only_tag_is_not_a_loose_key():
    tr = TagResolver(["+", "-"], alias_map={})
    assert tr.resolve("+") == "+"
    assert tr.resolve("-") == "-"
    assert tr.resolve("*") == "*"


def test_alias_cannot_steal_an_existing_spelling():
    tr = TagResolver(VOCAB, alias_map={"Anti-inflammatory": ["pain relief"]})
    assert tr.resolve("pain relief") == "Pain relief"
