"""Infrastructure for Nekifoch: config files, font tools, processes and logging."""
