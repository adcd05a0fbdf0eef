from lyric_bridge.cli import main

main()
