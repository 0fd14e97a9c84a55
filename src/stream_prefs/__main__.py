from stream_prefs.cli import main

main()
