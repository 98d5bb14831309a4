from ultrastar_lyrics.cli import main

main()
