GENERATE_STAGES = [
    ("load_config", "Load config"),
    ("load_tree", "Load tree document"),
    ("generate_schema", "Generate schema"),
    ("check_schema", "Check schema"),
    ("write_schema", "Write schema"),
]

INSPECT_STAGES = [
    ("load_config", "Load config"),
    ("load_schema", "Load schema"),
    ("parse_schema", "Parse schema"),
]
