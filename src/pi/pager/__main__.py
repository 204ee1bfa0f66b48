from pi.pager.cli import entry

entry()
