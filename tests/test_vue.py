from __future__ import annotations

from pathlib import Path

from typezoom.pipeline import SerializerOptions
from typezoom.vue import collect_vue_files, extract_script, prepare_root_names, vue_source_provider


def _w(p: Path, rel: str, content: str) -> None:
    f = p / rel
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(content, encoding="utf-8")


PANEL = """\
<template>
  <div>{{ title }}</div>
</template>

<script lang="ts">
import { Item } from "./item";
import Badge from "./Badge.vue";

@Component
export default class Panel extends Vue {
    title: string = "";
    item: Item;
    badge: Badge;
}
</script>

<style scoped>
div { color: red; }
</style>
"""

BADGE = """\
<script setup lang='ts'>
export default class Badge { count: number; }
</script>
"""


def test_extract_script_block() -> None:
    assert extract_script(PANEL).strip().startswith('import { Item } from "./item";')
    assert extract_script(BADGE).strip() == "export default class Badge { count: number; }"
    assert extract_script("<script>var x = 1;</script>") is None


def test_prepare_root_names() -> None:
    assert prepare_root_names(["a/Panel.vue", "b/main.ts"]) == ["a/Panel.vue.ts", "b/main.ts"]


def test_source_provider_only_answers_virtual_paths(tmp_path: Path) -> None:
    _w(tmp_path, "Panel.vue", PANEL)
    _w(tmp_path, "Empty.vue", "<template><div/></template>\n")

    assert "class Panel" in vue_source_provider(str(tmp_path / "Panel.vue.ts"))
    assert vue_source_provider(str(tmp_path / "Panel.vue")) is None
    assert vue_source_provider(str(tmp_path / "Empty.vue.ts")) is None
    assert vue_source_provider(str(tmp_path / "Gone.vue.ts")) is None


def test_collect_vue_files(tmp_path: Path) -> None:
    _w(tmp_path, "Panel.vue", PANEL)
    _w(tmp_path, "Badge.vue", BADGE)
    _w(tmp_path, "item.ts", "export class Item { id: number; }\n")

    results = collect_vue_files([tmp_path / "Panel.vue"])

    assert [Path(r.file_name).name for r in results] == ["Panel.vue.ts"]
    (entry,) = results[0].results
    assert entry.root.name == "Panel"
    assert [d.name for d in entry.dependencies] == ["Item", "Badge"]
    badge = entry.dependencies[1]
    assert [m.name for m in badge.members] == ["count"]


def test_explicit_filter_is_respected(tmp_path: Path) -> None:
    _w(tmp_path, "Panel.vue", PANEL)
    _w(tmp_path, "Badge.vue", BADGE)
    _w(tmp_path, "item.ts", "export class Item { id: number; }\n")

    options = SerializerOptions(entry_filter=lambda decl: decl.name == "Badge")
    results = collect_vue_files([tmp_path / "Panel.vue"], options)

    assert [Path(r.file_name).name for r in results] == ["Badge.vue.ts"]
