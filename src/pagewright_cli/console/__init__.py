from pagewright_cli.console.console import Console as Console
