"""Program-file and interpreter construction services."""
