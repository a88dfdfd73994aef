"""lockforge CLI subcommands."""
