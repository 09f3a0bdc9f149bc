"""Qt user interface: tray menu, error log window, and widgets."""
