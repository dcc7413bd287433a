# Live check against YouTube and Lemonfox; needs network and LEMONFOX_API_KEY.
from yt2text.config import DOWNLOADS_DIR, get_lemonfox_api_key
from yt2text.youtube_downloader import download_audio
from yt2text.transcriber import transcribe_file

url = "https://www.youtube.com/watch?v=Y9QfOPxmxVI"

result = download_audio(url, DOWNLOADS_DIR / "smoke_test.mp3")
print("Downloaded to: ", result.output_path, "ok=", result.ok)

if result.ok:
    transcript = transcribe_file(result.output_path, get_lemonfox_api_key())
    print("Transcript text preview:")
    print(transcript.text[:500])
