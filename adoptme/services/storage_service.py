# adoptme/services/storage_service.py
import uuid
import logging
from flask import Flask
from firebase_admin import storage
from werkzeug.datastructures import FileStorage

ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp"}

class StorageService:
    """
    Firebase Storage에 반려동물 이미지를 업로드하는 서비스 클래스입니다.
    업로드된 파일은 공개로 전환되고, 공개 URL이 Pet.image에 저장됩니다.
    """

    def __init__(self, bucket=None):
        """
        버킷은 생성자로 직접 주입하거나(테스트), init_app을 통해 설정합니다.
        """
        self.bucket = bucket

    def init_app(self, app: Flask):
        """
        Flask 앱 초기화 과정에서 호출되어 Storage 버킷을 설정합니다.

        :param app: Flask 애플리케이션 객체
        """
        bucket_name = app.config.get('FIREBASE_STORAGE_BUCKET')
        if not bucket_name:
            raise ValueError("FIREBASE_STORAGE_BUCKET must be set in .env or the config class.")

        self.bucket = storage.bucket(bucket_name)
        logging.info("StorageService: Firebase Storage bucket initialized.")

    def upload_pet_image(self, file: FileStorage) -> dict:
        """
        업로드된 이미지를 'pets/<uuid>.<ext>' 경로에 저장하고 공개 URL을 반환합니다.

        :param file: multipart 요청의 'image' 파일
        :return: 저장 경로(file_path)와 공개적으로 접근 가능한 URL(public_url)
        :raises ValueError: 이미지가 아니거나 확장자가 허용되지 않는 경우
        """
        if not self.bucket:
            raise RuntimeError("StorageService is not initialized. Call init_app first.")

        filename = file.filename or ''
        extension = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
        if extension not in ALLOWED_EXTENSIONS or not (file.mimetype or '').startswith('image/'):
            raise ValueError(f"'{filename}' is not a supported image file.")

        destination_blob_name = f"pets/{uuid.uuid4()}.{extension}"
        blob = self.bucket.blob(destination_blob_name)

        try:
            blob.upload_from_file(file.stream, content_type=file.mimetype)
            blob.make_public()
        except Exception as e:
            logging.error(f"Pet image upload failed ({destination_blob_name}): {e}", exc_info=True)
            raise

        logging.info(f"Pet image uploaded to {destination_blob_name}")
        return {"file_path": destination_blob_name, "public_url": blob.public_url}

    def delete_file(self, file_path: str) -> None:
        """업로드된 파일을 삭제합니다. 삭제 실패는 기록만 하고 호출 측의 원래 오류를 가리지 않습니다."""
        try:
            self.bucket.blob(file_path).delete()
            logging.info(f"Deleted orphaned upload {file_path}")
        except Exception as e:
            logging.error(f"Failed to delete {file_path}: {e}", exc_info=True)
