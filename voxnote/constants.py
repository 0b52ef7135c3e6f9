"""All magic values live here — no inline literals anywhere else."""

# Formats the transcription service accepts as-is (extension, lower-case, no dot).
ACCEPTED_EXTENSIONS: frozenset[str] = frozenset(
    {"mp3", "m4a", "wav", "mp4", "mpeg", "mpga", "webm", "ogg"}
)
MP3_CONTENT_TYPE = "audio/mp3"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
STAGED_FALLBACK_EXTENSION = "tmp"
STAGED_EXTENSION_PATTERN = r"[a-z0-9]+"

# Artifact names
RECORDING_NAME = "recording-%d.mp3"
CONVERTED_NAME = "converted-%d.mp3"
STAGED_INPUT_NAME = "input-%s.%s"
STAGED_OUTPUT_NAME = "output-%s.mp3"

# Fixed transcription fields
WHISPER_MODEL = "whisper-1"
RESPONSE_FORMAT = "json"
TRANSCRIPTION_LANGUAGE = "en"
TRANSCRIPTION_TEMPERATURE = "0.1"

# ffmpeg
FFMPEG_VERSION_FLAG = "-version"
FFMPEG_OVERWRITE_FLAG = "-y"
FFMPEG_INPUT_FLAG = "-i"
FFMPEG_CODEC_FLAG = "-acodec"
FFMPEG_MP3_CODEC = "libmp3lame"
FFMPEG_PROBE_TIMEOUT: float = 10.0

# Conversion endpoint
CONVERT_AUDIO_FIELD = "audio"
CONVERT_ERROR_FIELD = "error"
JSON_CONTENT_TYPE = "application/json"
HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_SERVER_ERROR = 500
HTTP_SERVICE_UNAVAILABLE = 503

# Microphone
MIC_SAMPLE_DTYPE = "int16"

# Error messages (user-facing)
MSG_NO_AUDIO = "No audio file provided"
MSG_EMPTY_NAME = "Audio file name must not be empty"
MSG_PIPELINE_BUSY = "A transcription is already in progress"
MSG_ALREADY_RECORDING = "Recording already in progress"
MSG_NOT_RECORDING = "No recording in progress"
MSG_TOOL_UNAVAILABLE = "ffmpeg is not installed on the server."
MSG_CONVERT_UNREACHABLE = "Audio conversion service is unreachable"
MSG_CONVERSION_FAILED = "Failed to convert audio."
MSG_CONVERSION_NO_OUTPUT = "ffmpeg did not produce any output"
MSG_CONVERSION_TIMEOUT = "ffmpeg timed out after %ss"
MSG_IO_FAILURE = "Could not stage audio for conversion"
MSG_INVALID_UPLOAD = "Invalid or missing audio file."
MSG_TRANSCRIPTION_FAILED = "Failed to transcribe audio"
MSG_AUTH_MISSING = "OpenAI API key is not configured"
MSG_AUTH_INVALID = "OpenAI rejected the API key"
MSG_NETWORK = "Could not reach the transcription service"
MSG_EMPTY_TRANSCRIPT = "Transcription service returned no text"
MSG_MIC_DENIED = "Microphone access denied or not available."
MSG_MIC_UNAVAILABLE = "No usable microphone found"

# Log messages
LOG_STATE = "Pipeline state → %s"
LOG_CLASSIFIED = "%s classified as %s"
LOG_CONVERTING = "Converting %s to MP3…"
LOG_CONVERTED = "Converted %s → %s (%d bytes)"
LOG_FFMPEG_CMD = "Running %s"
LOG_FFMPEG_FAILED = "ffmpeg exited with %s: %s"
LOG_SENDING = "Sending %s (%d bytes) to transcription service…"
LOG_TRANSCRIBED = "✓ Transcribed %s (%.1fs)"
LOG_FAILED = "✗ Transcription failed: %s"
LOG_UNEXPECTED = "Unexpected pipeline failure"
LOG_RECORDING_STARTED = "Recording started"
LOG_RECORDING_STOPPED = "Recording stopped: %d chunks, %d bytes"
LOG_MIC_STATUS = "Microphone status: %s"
LOG_CLEANUP_FAILED = "Could not remove staged file %s: %s"
LOG_CONVERT_REQUEST = "Conversion request failed: %s"

# CLI
MSG_PRESS_ENTER = "Recording… press Enter to stop."
