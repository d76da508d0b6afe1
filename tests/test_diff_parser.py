"""Tests for the git diff parser."""

from nocommit.diff_parser import parse_diff

_SIMPLE_DIFF = """\
diff --git a/app.rb b/app.rb
new file mode 100644
index 0000000..e69de29
--- /dev/null
+++ b/app.rb
@@ -0,0 +1,3 @@
+class App
+  # nocommit: fix later
+end
"""

_MULTI_FILE_DIFF = """\
diff --git a/config.py b/config.py
index 83db48f..bf269f4 100644
--- a/config.py
+++ b/config.py
@@ -1,3 +1,4 @@
 import os
+import hashlib

 DEBUG = True
diff --git a/main.py b/main.py
index 1a2b3c4..5d6e7f8 100644
--- a/main.py
+++ b/main.py
@@ -10,4 +10,6 @@
 def run():
     pass
+    print("running")
+    return True
"""

_RENAME_DIFF = """\
diff --git a/old_name.py b/new_name.py
similarity index 100%
rename from old_name.py
rename to new_name.py
"""

_DELETE_DIFF = """\
diff --git a/removed.py b/removed.py
deleted file mode 100644
--- a/removed.py
+++ /dev/null
@@ -1,3 +0,0 @@
-import os
-print("hello")
-print("world")
"""

# Added lines whose text begins with "++" / "--" look like file headers
_HEADER_LOOKALIKE_DIFF = """\
diff --git a/notes.txt b/notes.txt
--- a/notes.txt
+++ b/notes.txt
@@ -1,2 +1,3 @@
 first
---- removed rule
+++ b/not-a-file
+--- also content
"""

_TWO_HUNK_DIFF = """\
diff --git a/lib.py b/lib.py
--- a/lib.py
+++ b/lib.py
@@ -1,2 +1,3 @@
 a = 1
+b = 2
 c = 3
@@ -20,2 +21,3 @@ def tail():
 x = 1
+y = 2
 z = 3
"""

_BINARY_DIFF = """\
diff --git a/logo.png b/logo.png
new file mode 100644
index 0000000..a1b2c3d
Binary files /dev/null and b/logo.png differ
"""

_QUOTED_PATH_DIFF = """\
diff --git "a/caf\\303\\251 menu.txt" "b/caf\\303\\251 menu.txt"
new file mode 100644
--- /dev/null
+++ "b/caf\\303\\251 menu.txt"
@@ -0,0 +1 @@
+espresso
"""

_BINARY_THEN_QUOTED_DIFF = """\
diff --git a/img.png b/img.png
new file mode 100644
index 0000000..a1b2c3d
Binary files /dev/null and b/img.png differ
diff --git "a/caf\\303\\251.rb" "b/caf\\303\\251.rb"
new file mode 100644
index 0000000..e69de29
--- /dev/null
+++ "b/caf\\303\\251.rb"
@@ -0,0 +1 @@
+# nocommit
"""

_PLAIN_UNIFIED_DIFF = """\
--- a/one.txt\t2024-01-01 10:00:00.000000000 +0000
+++ b/one.txt\t2024-01-02 10:00:00.000000000 +0000
@@ -1 +1,2 @@
 keep
+added one
--- a/two.txt
+++ b/two.txt
@@ -1 +1 @@
-old
+added two
"""

_NO_NEWLINE_DIFF = """\
diff --git a/end.txt b/end.txt
--- a/end.txt
+++ b/end.txt
@@ -1 +1 @@
-last
\\ No newline at end of file
+last line
\\ No newline at end of file
"""


class TestParseDiff:
    def test_parse_new_file(self):
        segments = parse_diff(_SIMPLE_DIFF)
        assert len(segments) == 1
        segment = segments[0]
        assert segment.path == "app.rb"
        assert segment.is_new is True
        assert len(segment.added_lines) == 3

    def test_added_line_content(self):
        segments = parse_diff(_SIMPLE_DIFF)
        texts = [line for _, line in segments[0].added_lines]
        assert texts == ["class App", "  # nocommit: fix later", "end"]

    def test_parse_multi_file(self):
        segments = parse_diff(_MULTI_FILE_DIFF)
        assert [s.path for s in segments] == ["config.py", "main.py"]

    def test_multi_file_added_lines(self):
        segments = parse_diff(_MULTI_FILE_DIFF)
        assert segments[0].added_lines == [(2, "import hashlib")]
        assert segments[1].added_lines == [(12, '    print("running")'), (13, "    return True")]

    def test_context_and_removed_lines_not_collected(self):
        segments = parse_diff(_MULTI_FILE_DIFF)
        assert "import os" not in segments[0].added_text
        assert "DEBUG" not in segments[0].added_text

    def test_parse_rename(self):
        segments = parse_diff(_RENAME_DIFF)
        assert len(segments) == 1
        segment = segments[0]
        assert segment.is_renamed is True
        assert segment.old_path == "old_name.py"
        assert segment.path == "new_name.py"
        assert segment.added_lines == []

    def test_parse_delete(self):
        segments = parse_diff(_DELETE_DIFF)
        assert len(segments) == 1
        segment = segments[0]
        assert segment.is_deleted is True
        assert segment.path == "removed.py"
        assert segment.added_lines == []

    def test_header_lookalikes_inside_hunk_are_content(self):
        segments = parse_diff(_HEADER_LOOKALIKE_DIFF)
        assert len(segments) == 1
        assert segments[0].path == "notes.txt"
        assert [line for _, line in segments[0].added_lines] == [
            "++ b/not-a-file",
            "--- also content",
        ]

    def test_multiple_hunks_keep_order_and_line_numbers(self):
        segments = parse_diff(_TWO_HUNK_DIFF)
        assert segments[0].added_lines == [(2, "b = 2"), (22, "y = 2")]

    def test_binary_file(self):
        segments = parse_diff(_BINARY_DIFF)
        assert segments[0].is_binary is True
        assert segments[0].added_lines == []

    def test_quoted_path_is_unquoted(self):
        segments = parse_diff(_QUOTED_PATH_DIFF)
        assert len(segments) == 1
        assert segments[0].path == "café menu.txt"
        assert segments[0].added_text == "espresso"

    def test_quoted_header_after_file_without_hunks(self):
        segments = parse_diff(_BINARY_THEN_QUOTED_DIFF)
        assert [s.path for s in segments] == ["img.png", "café.rb"]
        assert segments[0].is_binary is True
        assert segments[0].added_lines == []
        assert segments[1].is_binary is False
        assert segments[1].is_new is True
        assert segments[1].added_lines == [(1, "# nocommit")]

    def test_plain_unified_diff(self):
        segments = parse_diff(_PLAIN_UNIFIED_DIFF)
        assert [s.path for s in segments] == ["one.txt", "two.txt"]
        assert segments[0].added_text == "added one"
        assert segments[1].added_text == "added two"

    def test_no_newline_marker_skipped(self):
        segments = parse_diff(_NO_NEWLINE_DIFF)
        assert segments[0].added_lines == [(1, "last line")]

    def test_crlf_content_is_stripped(self):
        diff = _SIMPLE_DIFF.replace("\n", "\r\n")
        segments = parse_diff(diff)
        assert segments[0].path == "app.rb"
        assert segments[0].added_lines[2] == (3, "end")

    def test_every_added_line_lands_in_one_segment(self):
        diff = _MULTI_FILE_DIFF + _SIMPLE_DIFF + _TWO_HUNK_DIFF
        segments = parse_diff(diff)
        collected = [line for s in segments for _, line in s.added_lines]
        expected = [
            line[1:]
            for line in diff.splitlines()
            if line.startswith("+") and not line.startswith("+++")
        ]
        assert collected == expected

    def test_empty_diff(self):
        assert parse_diff("") == []

    def test_added_text_joins_lines(self):
        segments = parse_diff(_MULTI_FILE_DIFF)
        assert segments[1].added_text == '    print("running")\n    return True'
