"""
Generators — produce the literal content the recipe writes.

File-shaped output comes back as ``GeneratedFile``; snippets that are
spliced into existing files are plain module-level strings.
"""
