"""London acting industry events calendar."""
