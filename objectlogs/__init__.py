"""Object log analyzer: created, deleted and modified object reports from XML and JSON logs."""
